"""Defaults and policy-file loading for graph-risk."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from graph_risk.errors import InvalidArgument

log = logging.getLogger(__name__)

# Depth limit the call-graph view uses when building a symbol's graph
CALL_GRAPH_MAX_DEPTH = 5

# Longest path (in nodes) find_path will follow
FIND_PATH_MAX_DEPTH = 10

# Items shown on a dependency board when no item has a blocking relation
BOARD_FALLBACK_LIMIT = 10

# Hotspot normalization ceilings kept for visual parity with the legacy
# complexity-vs-churn scatter plot
LEGACY_COMPLEXITY_CAP = 30
LEGACY_CHANGE_COUNT_CAP = 20

# Thresholds (0–100 scale) for badges on precomputed hotspot risk scores
LEGACY_BADGE_THRESHOLDS = (30, 60, 80)


def load_policy(path: Path):
    """Load a RiskPolicy from a YAML (or JSON) policy file.

    Expected shape::

        metrics:
          complexity: {cap: 30}
          change_count: {cap: 20}

    Raises:
        InvalidArgument: file is not a mapping or describes an invalid policy.
        pydantic.ValidationError: entries have the wrong types.
    """
    from graph_risk.schemas.policy import PolicyFile

    data = yaml.safe_load(Path(path).read_text())
    if not isinstance(data, dict):
        raise InvalidArgument(f"policy file {path} must contain a mapping")
    policy = PolicyFile.model_validate(data).to_policy()
    log.debug("Loaded risk policy from %s: %s", path, policy.names)
    return policy
