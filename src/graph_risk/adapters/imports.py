"""File-dependency adapter: import relations → layered file graph."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field

from graph_risk.analysis.layering import Direction
from graph_risk.analysis.models import LevelLayout
from graph_risk.analysis.packing import layer_graph
from graph_risk.errors import InvalidArgument
from graph_risk.ir.graph import CodeGraph
from graph_risk.ir.nodes import NeighborDirection


class ImportDirection(str, Enum):
    IMPORTS = "imports"          # what this file pulls in
    IMPORTED_BY = "imported_by"  # who pulls this file in
    BOTH = "both"


_LAYER_DIRECTION = {
    ImportDirection.IMPORTS: Direction.FORWARD,
    ImportDirection.IMPORTED_BY: Direction.BACKWARD,
    ImportDirection.BOTH: Direction.BOTH,
}


class ImportRef(BaseModel):
    path: str
    import_type: str = "ES_IMPORT"   # ES_IMPORT|ES_DYNAMIC|COMMONJS|TYPESCRIPT_TYPE
    symbols: list[str] = Field(default_factory=list)


class FileDependency(BaseModel):
    path: str
    imports: list[ImportRef] = Field(default_factory=list)


class ImportSummary(BaseModel):
    path: str
    imports: list[str] = Field(default_factory=list)
    imported_by: list[str] = Field(default_factory=list)
    hidden_imports: int = 0
    hidden_imported_by: int = 0


def build_import_graph(files: Iterable[FileDependency]) -> CodeGraph:
    """Edges point importer → imported. Imports of unlisted files stay dangling."""
    files = list(files)
    graph = CodeGraph()
    for f in files:
        graph.add_node(f.path, {"path": f.path})
    for f in files:
        for ref in f.imports:
            graph.add_edge(f.path, ref.path, kind=ref.import_type)
    return graph


def layout_imports(
    graph: CodeGraph,
    path: str,
    direction: ImportDirection | str = ImportDirection.IMPORTS,
    *,
    max_depth: int | None = None,
) -> LevelLayout:
    try:
        direction = ImportDirection(direction)
    except ValueError:
        raise InvalidArgument(f"unknown import direction: {direction!r}") from None
    return layer_graph(graph, [path], _LAYER_DIRECTION[direction], max_depth=max_depth)


def import_summary(graph: CodeGraph, path: str, *, limit: int = 5) -> ImportSummary:
    """Direct imports and importers of one file, truncated to ``limit`` each."""
    imports = list(dict.fromkeys(graph.neighbors(path, NeighborDirection.OUT)))
    imported_by = list(dict.fromkeys(graph.neighbors(path, NeighborDirection.IN)))
    return ImportSummary(
        path=path,
        imports=imports[:limit],
        imported_by=imported_by[:limit],
        hidden_imports=max(0, len(imports) - limit),
        hidden_imported_by=max(0, len(imported_by) - limit),
    )
