#!/usr/bin/env python3
"""
Dump the MPR sections the converter reads: [001 variables, the $E line window
and every <102 circle window, with 1-based line numbers. Read-only.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List

BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))

from mprcad.convert import decode_document
from mprcad.cursor import CIRCLE_SECTION_STOPS, LINE_SECTION_STOPS, LineCursor, split_document
from mprcad.parser import CIRCLE_SECTION_MARKER, CIRCLE_WINDOW, LINE_SECTION_MARKER, LINE_WINDOW
from mprcad.variables import VariableTable


def describe(text: str) -> List[str]:
    lines = split_document(text)
    report: List[str] = []

    table = VariableTable.build(lines)
    report.append(f"  variables: {len(table)}")
    for name in table:
        report.append(f"    {name} = {table[name]!r}")

    cursor = LineCursor(lines)
    if cursor.seek(LINE_SECTION_MARKER):
        report.append(f"  {LINE_SECTION_MARKER} at line {cursor.line_number - 1}")
        for number, line in cursor.window(LINE_SECTION_STOPS, LINE_WINDOW):
            report.append(f"    {number:5d}: {line}")
    else:
        report.append(f"  {LINE_SECTION_MARKER} section missing")

    cursor = LineCursor(lines)
    count = 0
    while cursor.seek(CIRCLE_SECTION_MARKER):
        count += 1
        report.append(f"  {CIRCLE_SECTION_MARKER} #{count} at line {cursor.line_number - 1}")
        for number, line in cursor.window(CIRCLE_SECTION_STOPS, CIRCLE_WINDOW):
            report.append(f"    {number:5d}: {line}")
    report.append(f"  {CIRCLE_SECTION_MARKER} sections: {count}")
    return report


def dump(path: Path) -> None:
    text = decode_document(path.read_bytes())
    print(f"{path.name}: {len(split_document(text))} lines")
    for row in describe(text):
        print(row)


def main(argv: Iterable[str] | None = None) -> int:
    targets = [Path(arg) for arg in (sys.argv[1:] if argv is None else argv)]
    if not targets:
        print("usage: dump_mpr_sections.py FILE [FILE ...]", file=sys.stderr)
        return 1
    for target in targets:
        if target.exists():
            dump(target)
        else:
            print(f"{target} missing")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
