"""Opt-in mapping of external signals onto builder calls."""

from __future__ import annotations

from QuerySpec.bindings.bind import Bind, Binding
from QuerySpec.bindings.binder import Binder, MetaBinding
from QuerySpec.bindings.pipeline import classify_reason, run_bindings, summarize_value
from QuerySpec.bindings.source import (
    ArraySignalSource,
    ChainedSignalSource,
    EnvironmentSignalSource,
    SignalSource,
)

__all__ = [
    "ArraySignalSource",
    "Bind",
    "Binder",
    "Binding",
    "ChainedSignalSource",
    "EnvironmentSignalSource",
    "MetaBinding",
    "SignalSource",
    "classify_reason",
    "run_bindings",
    "summarize_value",
]
