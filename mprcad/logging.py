from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class ParseWarning:
    section: str
    line_number: int
    key: str
    raw: str
    message: str

    def format(self) -> str:
        return f"{self.section} line {self.line_number}: {self.key.upper()}={self.raw!r} {self.message}"


@dataclass
class DiagnosticsLog:
    """
    Collect non-fatal parser findings so callers (and tests) can inspect them
    without scraping stdout. ``flush`` mirrors the records to ``destination``.
    """

    destination: Path | None = None

    def __post_init__(self) -> None:
        self._records: List[ParseWarning] = []

    def record(
        self,
        *,
        section: str,
        line_number: int,
        key: str,
        raw: str,
        message: str,
    ) -> ParseWarning:
        warning = ParseWarning(
            section=section,
            line_number=line_number,
            key=key,
            raw=raw,
            message=message,
        )
        self._records.append(warning)
        return warning

    @property
    def warnings(self) -> Tuple[ParseWarning, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def lines(self) -> List[str]:
        return [f"#{idx:04d} {entry.format()}" for idx, entry in enumerate(self._records, start=1)]

    def flush(self) -> None:
        if self.destination is None:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        lines = self.lines()
        self.destination.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
