#!/usr/bin/env python3
"""
Server-friendly wrapper that converts an MPR file into a DXF.

Usage:
    python mpr_to_dxf.py INPUT_FILE OUTPUT_DXF

Exit codes:
    0 -> success
    1 -> failure
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))

from mprcad.convert import convert_bytes
from mprcad.dxf import write_dxf


def convert_to_dxf(source: Path, destination: Path) -> None:
    document = convert_bytes(source.read_bytes(), source_name=source.name)
    write_dxf(document.result, destination)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert an .mpr file into DXF format.")
    parser.add_argument("input", type=Path, help="Source .mpr file")
    parser.add_argument("output", type=Path, help="Destination DXF path")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(argv)
        convert_to_dxf(args.input, args.output)
        return 0
    except Exception as exc:  # pragma: no cover - server wrapper
        print(f"[error] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
