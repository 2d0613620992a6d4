#!/usr/bin/env python3
"""
Convert an MPR CAD/CAM interchange file into a minimal DXF drawing.

The first ``$E`` section supplies the single line (X/Y/Z end point, start at
the XY origin) and every ``<102`` section supplies one circle (XA/YA centre,
DU diameter).  Values may reference variables declared in the ``[001``
header.  Fields that cannot be read are reported as warnings; a line without
all three coordinates aborts the conversion before any DXF is written.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from mprcad.convert import convert_bytes
from mprcad.dxf import write_dxf
from mprcad.logging import DiagnosticsLog


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract the line and circles from an MPR file and write a DXF."
    )
    parser.add_argument("input", type=Path, help="Path to the source .mpr file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional DXF destination (defaults to <input>.dxf)",
    )
    parser.add_argument(
        "--warnings-log",
        type=Path,
        help="Write every skipped field / dropped circle to this path",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only report errors",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    blob = args.input.read_bytes()
    if not args.quiet:
        print(f"[+] Loaded {args.input} ({len(blob)} bytes)")

    diagnostics = DiagnosticsLog(args.warnings_log)
    try:
        document = convert_bytes(blob, source_name=args.input.name, diagnostics=diagnostics)
    finally:
        diagnostics.flush()

    if not args.quiet:
        for warning in document.warnings:
            print(f"[!] {warning.format()}")
        line = document.result.line
        print(
            f"[+] Extracted line to ({line.x}, {line.y}, {line.z}) "
            f"and {len(document.result.circles)} circle entities"
        )

    output_path = args.output or args.input.with_suffix(".dxf")
    write_dxf(document.result, output_path)
    if not args.quiet:
        print(f"[+] DXF written to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
