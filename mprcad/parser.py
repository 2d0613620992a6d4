"""
Scanner for the MPR sections this converter understands.

``$E`` opens the (single) line entity: ``X=``/``Y=``/``Z=`` with optional
quotes inside a 10-line lookahead window.  Every ``<102`` opens a circle
entity: ``XA="..."``/``YA="..."``/``DU="..."`` with mandatory quotes inside a
15-line window.  Values may name a ``[001`` variable instead of a literal.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .cursor import CIRCLE_SECTION_STOPS, LINE_SECTION_STOPS, LineCursor, split_document
from .entities import CircleDescriptor, ConversionResult, LineDescriptor
from .errors import LineExtractionError
from .logging import DiagnosticsLog
from .variables import VariableTable

LINE_SECTION_MARKER = "$E"
CIRCLE_SECTION_MARKER = "<102"
LINE_WINDOW = 10
CIRCLE_WINDOW = 15
LINE_KEYS = ("x", "y", "z")
CIRCLE_KEYS = ("xa", "ya", "du")

LINE_FIELD_RE = re.compile(r"^(\w+)\s*=\s*(.+)$")
CIRCLE_FIELD_RE = re.compile(r'^(\w+)\s*=\s*"([^"]+)"')
QUOTED_RE = re.compile(r'^"(.+)"$')
NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


@dataclass(frozen=True)
class FieldReading:
    key: str
    raw: str
    resolved: str
    value: float | None
    line_number: int

    @property
    def malformed(self) -> bool:
        return self.value is None


def parse_number(token: str) -> float | None:
    """Plain decimal/scientific literal -> finite float, anything else -> None."""

    text = token.strip()
    if not NUMBER_RE.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def _unquote(value: str) -> str:
    match = QUOTED_RE.match(value)
    return match.group(1) if match else value


def _read_fields(
    cursor: LineCursor,
    *,
    stops: Sequence[str],
    limit: int,
    pattern: re.Pattern[str],
    keys: Sequence[str],
    table: VariableTable,
    section: str,
    diagnostics: DiagnosticsLog,
    unquote: bool,
) -> Tuple[Dict[str, float], Dict[str, FieldReading]]:
    values: Dict[str, float] = {}
    readings: Dict[str, FieldReading] = {}
    for line_number, line in cursor.window(stops, limit):
        match = pattern.match(line)
        if not match:
            continue
        key = match.group(1).lower()
        if key not in keys:
            continue
        raw = match.group(2).strip()
        if unquote:
            raw = _unquote(raw)
        resolved = table.resolve(raw)
        reading = FieldReading(
            key=key,
            raw=raw,
            resolved=resolved,
            value=parse_number(resolved),
            line_number=line_number,
        )
        readings[key] = reading
        if reading.malformed:
            message = "is not a number"
            if resolved != raw:
                message = f"resolves to non-numeric {resolved!r}"
            diagnostics.record(
                section=section,
                line_number=line_number,
                key=key,
                raw=raw,
                message=message,
            )
            continue
        values[key] = reading.value
    return values, readings


def _split_unset(keys: Iterable[str], values: Dict[str, float], readings: Dict[str, FieldReading]) -> Tuple[List[str], List[str]]:
    missing: List[str] = []
    malformed: List[str] = []
    for key in keys:
        if key in values:
            continue
        if key in readings:
            malformed.append(key)
        else:
            missing.append(key)
    return missing, malformed


def extract_line(text: str, *, diagnostics: DiagnosticsLog | None = None) -> LineDescriptor:
    lines = split_document(text)
    table = VariableTable.build(lines)
    log = diagnostics if diagnostics is not None else DiagnosticsLog()

    cursor = LineCursor(lines)
    if not cursor.seek(LINE_SECTION_MARKER):
        raise LineExtractionError(
            "Required line parameters missing: no $E section found.",
            missing=LINE_KEYS,
        )
    section = f"$E@{cursor.line_number - 1}"
    values, readings = _read_fields(
        cursor,
        stops=LINE_SECTION_STOPS,
        limit=LINE_WINDOW,
        pattern=LINE_FIELD_RE,
        keys=LINE_KEYS,
        table=table,
        section=section,
        diagnostics=log,
        unquote=True,
    )
    missing, malformed = _split_unset(LINE_KEYS, values, readings)
    if missing or malformed:
        details = []
        if missing:
            details.append("missing " + ", ".join(key.upper() for key in missing))
        if malformed:
            details.append("non-numeric " + ", ".join(key.upper() for key in malformed))
        raise LineExtractionError(
            f"Required line parameters missing in {section}: {'; '.join(details)}.",
            missing=missing,
            malformed=malformed,
        )
    return LineDescriptor(x=values["x"], y=values["y"], z=values["z"])


def extract_circles(text: str, *, diagnostics: DiagnosticsLog | None = None) -> Tuple[CircleDescriptor, ...]:
    lines = split_document(text)
    table = VariableTable.build(lines)
    log = diagnostics if diagnostics is not None else DiagnosticsLog()

    circles: List[CircleDescriptor] = []
    cursor = LineCursor(lines)
    while cursor.seek(CIRCLE_SECTION_MARKER):
        marker_line = cursor.line_number - 1
        section = f"<102@{marker_line}"
        values, readings = _read_fields(
            cursor,
            stops=CIRCLE_SECTION_STOPS,
            limit=CIRCLE_WINDOW,
            pattern=CIRCLE_FIELD_RE,
            keys=CIRCLE_KEYS,
            table=table,
            section=section,
            diagnostics=log,
            unquote=False,
        )
        missing, malformed = _split_unset(CIRCLE_KEYS, values, readings)
        if missing or malformed:
            unset = ", ".join(key.upper() for key in missing + malformed)
            log.record(
                section=section,
                line_number=marker_line,
                key="circle",
                raw=unset,
                message="circle dropped (incomplete parameters)",
            )
            continue
        circles.append(CircleDescriptor(xa=values["xa"], ya=values["ya"], du=values["du"]))
    return tuple(circles)


def parse_document(text: str, *, diagnostics: DiagnosticsLog | None = None) -> ConversionResult:
    log = diagnostics if diagnostics is not None else DiagnosticsLog()
    first = len(log)
    line = extract_line(text, diagnostics=log)
    circles = extract_circles(text, diagnostics=log)
    return ConversionResult(line=line, circles=circles, warnings=log.warnings[first:])
