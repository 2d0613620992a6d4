from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

from .cursor import VARIABLE_SECTION_STOPS, LineCursor

VARIABLE_SECTION_MARKER = "[001"
ASSIGNMENT_RE = re.compile(r'(\w+)\s*=\s*"([^"]+)"')


@dataclass(frozen=True)
class VariableTable:
    """Name -> literal value bindings from the ``[001`` header section."""

    bindings: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bindings", MappingProxyType(dict(self.bindings)))

    @classmethod
    def build(cls, lines: Sequence[str]) -> "VariableTable":
        cursor = LineCursor(lines)
        if not cursor.seek(VARIABLE_SECTION_MARKER):
            return cls()
        bindings: dict[str, str] = {}
        for _, line in cursor.window(VARIABLE_SECTION_STOPS):
            match = ASSIGNMENT_RE.search(line)
            if match:
                bindings[match.group(1)] = match.group(2)
        return cls(bindings)

    def resolve(self, token: str) -> str:
        return self.bindings.get(token, token)

    def __contains__(self, name: object) -> bool:
        return name in self.bindings

    def __getitem__(self, name: str) -> str:
        return self.bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)
