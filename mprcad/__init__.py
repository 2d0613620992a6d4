"""
MPR (CAD/CAM interchange text) to DXF conversion core.
"""

from .convert import ConvertedDocument, convert_bytes, convert_text, decode_document
from .cursor import LineCursor, is_section_boundary, split_document
from .dxf import DEFAULT_DXF_FILENAME, DXF_MIME_TYPE, render_dxf, render_result, suggested_filename, write_dxf
from .entities import CircleDescriptor, ConversionResult, LineDescriptor
from .errors import LineExtractionError, MissingInputError, MprConversionError
from .logging import DiagnosticsLog, ParseWarning
from .parser import FieldReading, extract_circles, extract_line, parse_document, parse_number
from .variables import VariableTable

__all__ = [
    "ConvertedDocument",
    "convert_bytes",
    "convert_text",
    "decode_document",
    "LineCursor",
    "is_section_boundary",
    "split_document",
    "DEFAULT_DXF_FILENAME",
    "DXF_MIME_TYPE",
    "render_dxf",
    "render_result",
    "suggested_filename",
    "write_dxf",
    "CircleDescriptor",
    "ConversionResult",
    "LineDescriptor",
    "LineExtractionError",
    "MissingInputError",
    "MprConversionError",
    "DiagnosticsLog",
    "ParseWarning",
    "FieldReading",
    "extract_circles",
    "extract_line",
    "parse_document",
    "parse_number",
    "VariableTable",
]
