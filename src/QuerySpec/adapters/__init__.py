"""Terminal adapters (engine hand-off and in-place modification)."""

from __future__ import annotations

from QuerySpec.adapters.engine import EngineAdapter, ShapedEngineAdapter, resolve_target
from QuerySpec.adapters.modifier import MutableQuery, QueryModifierAdapter, QueryVars, merge_group

__all__ = [
    "EngineAdapter",
    "MutableQuery",
    "QueryModifierAdapter",
    "QueryVars",
    "ShapedEngineAdapter",
    "merge_group",
    "resolve_target",
]
