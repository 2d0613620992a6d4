from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .dxf import DXF_MIME_TYPE, render_result, suggested_filename
from .entities import ConversionResult
from .errors import MissingInputError
from .logging import DiagnosticsLog, ParseWarning
from .parser import parse_document


@dataclass(frozen=True)
class ConvertedDocument:
    result: ConversionResult
    dxf: str
    filename: str
    mime_type: str = DXF_MIME_TYPE

    @property
    def warnings(self) -> Tuple[ParseWarning, ...]:
        return self.result.warnings

    def encode(self) -> bytes:
        return self.dxf.encode("ascii")


def decode_document(blob: bytes | None) -> str:
    if not blob:
        raise MissingInputError()
    return blob.decode("utf-8-sig", errors="replace")


def convert_text(
    text: str,
    *,
    source_name: str | None = None,
    diagnostics: DiagnosticsLog | None = None,
) -> ConvertedDocument:
    result = parse_document(text, diagnostics=diagnostics)
    return ConvertedDocument(
        result=result,
        dxf=render_result(result),
        filename=suggested_filename(source_name),
    )


def convert_bytes(
    blob: bytes | None,
    *,
    source_name: str | None = None,
    diagnostics: DiagnosticsLog | None = None,
) -> ConvertedDocument:
    return convert_text(decode_document(blob), source_name=source_name, diagnostics=diagnostics)
