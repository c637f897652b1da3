"""Exception types raised by graph-risk."""

from __future__ import annotations


class GraphRiskError(Exception):
    """Base class for graph-risk errors."""


class InvalidArgument(GraphRiskError, ValueError):
    """A caller passed an argument the engine cannot work with.

    This is the only error that aborts a computation. Partial input
    (dangling edges, missing metrics, unknown roots) is handled by omission
    or zero-substitution instead.
    """
