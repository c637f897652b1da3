"""Node and Edge dataclasses — pure data, no logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NeighborDirection(str, Enum):
    OUT = "out"    # follow outgoing edges (source → target)
    IN = "in"      # follow incoming edges (target → source)
    BOTH = "both"


@dataclass
class Node:
    id: str
    # Domain meaning (name, file path, kind, metrics) is opaque to the engine.
    attributes: dict[str, float | int | str] = field(default_factory=dict)


@dataclass(frozen=True)
class Edge:
    source: str   # Node.id
    target: str   # Node.id
    weight: float = 1.0
    kind: str = "depends_on"  # "calls"|"imports"|"blocks"|...

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)
