"""Domain adapters: map symbols, files, work items and hotspots in/out of the engine.

No traversal or scoring logic lives here; each adapter builds a CodeGraph
from its records, calls ``graph_risk.analysis`` and reshapes the result.
"""
