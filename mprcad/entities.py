from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .logging import ParseWarning


@dataclass(frozen=True)
class LineDescriptor:
    x: float
    y: float
    z: float

    @property
    def start(self) -> Tuple[float, float, float]:
        return (0.0, 0.0, self.z)

    @property
    def end(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class CircleDescriptor:
    xa: float
    ya: float
    du: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.xa, self.ya)

    @property
    def radius(self) -> float:
        return self.du / 2.0


@dataclass(frozen=True)
class ConversionResult:
    line: LineDescriptor
    circles: Tuple[CircleDescriptor, ...] = ()
    warnings: Tuple[ParseWarning, ...] = ()
