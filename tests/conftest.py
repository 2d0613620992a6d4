from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


SAMPLE_MPR = """[H
VERSION="4.0"
UM="0"

[001
L="800"
B="600"
D="19"
SCALE="2.0"
KM="Bottom panel"

<100 \\WerkStck\\
LA="L"
BR="B"
DI="D"

$E0
KP
X=10
Y=20
Z=5
KO=00

<102 \\BohrVert\\
XA="100"
YA="200"
DU="SCALE"
TI="10"

<102 \\BohrVert\\
XA="L"
YA="40.5"
DU="8"
TI="D"
!
"""

MINIMAL_MPR = '[001]\nSCALE="2.0"\n$E\nX=10\nY=20\nZ=5\n<102>\nXA="100"\nYA="200"\nDU="SCALE"\n'


def dxf_pairs(text: str) -> list[tuple[str, str]]:
    rows = text.split("\n")
    if rows and rows[-1] == "":
        rows.pop()
    assert len(rows) % 2 == 0, "DXF must consist of code/value pairs"
    return [(rows[idx], rows[idx + 1]) for idx in range(0, len(rows), 2)]


def load_script(relative: str) -> ModuleType:
    path = ROOT / relative
    name = "_script_" + path.stem
    spec = importlib.util.spec_from_file_location(name, path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def sample_mpr() -> str:
    return SAMPLE_MPR


@pytest.fixture
def minimal_mpr() -> str:
    return MINIMAL_MPR


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "panel.mpr"
    path.write_text(SAMPLE_MPR, encoding="utf-8")
    return path
