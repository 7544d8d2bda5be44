"""QuerySpec: fluent, auditable query specification builders."""

from __future__ import annotations

from QuerySpec.adapters import EngineAdapter, QueryModifierAdapter, QueryVars, ShapedEngineAdapter
from QuerySpec.bindings import (
    ArraySignalSource,
    Bind,
    Binder,
    ChainedSignalSource,
    EnvironmentSignalSource,
    SignalSource,
)
from QuerySpec.builders import BaseBuilder, PostsQuery, TermsQuery, posts, terms

__all__ = [
    "ArraySignalSource",
    "BaseBuilder",
    "Bind",
    "Binder",
    "ChainedSignalSource",
    "EngineAdapter",
    "EnvironmentSignalSource",
    "PostsQuery",
    "QueryModifierAdapter",
    "QueryVars",
    "ShapedEngineAdapter",
    "SignalSource",
    "TermsQuery",
    "posts",
    "terms",
]
