from __future__ import annotations

from typing import Sequence


class MprConversionError(RuntimeError):
    """Base class for failures that abort an MPR conversion."""

    status = 500


class MissingInputError(MprConversionError):
    status = 400

    def __init__(self, message: str = "No file uploaded") -> None:
        super().__init__(message)


class LineExtractionError(MprConversionError):
    def __init__(
        self,
        message: str,
        *,
        missing: Sequence[str] = (),
        malformed: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.missing = tuple(missing)
        self.malformed = tuple(malformed)
