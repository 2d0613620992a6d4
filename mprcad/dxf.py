from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .entities import CircleDescriptor, ConversionResult, LineDescriptor

DXF_MIME_TYPE = "application/dxf"
DEFAULT_DXF_FILENAME = "output.dxf"
DEFAULT_LAYER = "0"


def format_number(value: float) -> str:
    return repr(float(value))


def suggested_filename(source_name: str | None = None) -> str:
    if not source_name:
        return DEFAULT_DXF_FILENAME
    stem = Path(source_name).stem
    return f"{stem}.dxf" if stem else DEFAULT_DXF_FILENAME


def render_dxf(line: LineDescriptor, circles: Sequence[CircleDescriptor]) -> str:
    """
    Emit the minimal DXF this converter supports: an empty HEADER section and
    one ENTITIES section holding the LINE followed by every CIRCLE in order.
    The line starts at the XY origin on the same Z as its end point.
    """

    def emit(code: str, value: str) -> str:
        return f"{code}\n{value}\n"

    chunks: List[str] = []
    chunks.append(emit("0", "SECTION"))
    chunks.append(emit("2", "HEADER"))
    chunks.append(emit("0", "ENDSEC"))

    chunks.append(emit("0", "SECTION"))
    chunks.append(emit("2", "ENTITIES"))

    chunks.append(emit("0", "LINE"))
    chunks.append(emit("8", DEFAULT_LAYER))
    chunks.append(emit("10", "0.0"))
    chunks.append(emit("20", "0.0"))
    chunks.append(emit("30", format_number(line.z)))
    chunks.append(emit("11", format_number(line.x)))
    chunks.append(emit("21", format_number(line.y)))
    chunks.append(emit("31", format_number(line.z)))

    for circle in circles:
        chunks.append(emit("0", "CIRCLE"))
        chunks.append(emit("8", DEFAULT_LAYER))
        chunks.append(emit("10", format_number(circle.xa)))
        chunks.append(emit("20", format_number(circle.ya)))
        chunks.append(emit("30", "0.0"))
        chunks.append(emit("40", format_number(circle.radius)))

    chunks.append(emit("0", "ENDSEC"))
    chunks.append(emit("0", "EOF"))
    return "".join(chunks)


def render_result(result: ConversionResult) -> str:
    return render_dxf(result.line, result.circles)


def write_dxf(result: ConversionResult, destination: Path) -> Path:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render_result(result), encoding="ascii")
    return destination
