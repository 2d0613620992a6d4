#!/usr/bin/env python3
"""
Run the HTTP upload endpoint (POST /api/process-mpr).

Usage:
    python serve_mpr.py [--host 0.0.0.0] [--port 8000]
"""

from __future__ import annotations

import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))

from mprcad.service import main


if __name__ == "__main__":
    raise SystemExit(main())
