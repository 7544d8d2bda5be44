"""Terminal adapters that hand a finished specification to a query engine.

Engines are resolved lazily so that building and explaining a specification
never requires the engine to be importable.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from copy import deepcopy
from typing import Any, Mapping

from QuerySpec.utils.log import get_logger

logger = get_logger("adapters")

EngineTarget = Callable[..., Any] | str | None


def resolve_target(target: EngineTarget, label: str) -> Callable[..., Any]:
    """Resolve an engine callable.

    Args:
        target: Callable, ``"package.module:attr"`` import path, or None.
        label: Name used in error messages.

    Returns:
        The engine callable.

    Raises:
        RuntimeError: If the engine is not configured, its module cannot be
            imported, or the attribute is missing or not callable.
    """
    if target is None:
        raise RuntimeError(f"{label} is unavailable: no engine configured.")
    if callable(target):
        return target

    module_name, _, attr_path = str(target).partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise RuntimeError(f"{label} is unavailable: cannot import {module_name!r}.") from exc

    resolved: Any = module
    for part in (attr_path.split(".") if attr_path else []):
        resolved = getattr(resolved, part, None)
        if resolved is None:
            break
    if resolved is module or not callable(resolved):
        raise RuntimeError(f"{label} is unavailable: {target!r} is not a callable engine.")
    return resolved


def _check_target(target: object, role: str) -> None:
    if target is not None and not callable(target) and not isinstance(target, str):
        raise TypeError(f"{role} must be a callable or an import path, got {type(target).__name__}.")


class EngineAdapter:
    """Call an engine with a copy of the specification.

    Example:
        >>> posts("event").run(EngineAdapter("myapp.engine:find_posts"))
    """

    def __init__(self, target: EngineTarget, label: str | None = None) -> None:
        _check_target(target, "Engine")
        self.target = target
        self.label = label or (target if isinstance(target, str) else "Query engine")

    def run(self, args: Mapping[str, Any]) -> Any:
        engine = resolve_target(self.target, str(self.label))
        logger.debug("Handing specification with %d keys to %s", len(args), self.label)
        return engine(deepcopy(dict(args)))


class ShapedEngineAdapter:
    """Run an engine and pass its result through a result-shaping layer."""

    def __init__(self, engine: EngineTarget, shaper: EngineTarget, label: str | None = None) -> None:
        _check_target(engine, "Engine")
        _check_target(shaper, "Shaper")
        self.engine = engine
        self.shaper = shaper
        self.label = label or "Shaped query engine"

    def run(self, args: Mapping[str, Any]) -> Any:
        engine = resolve_target(self.engine, self.label)
        shaper = resolve_target(self.shaper, f"{self.label} shaper")
        logger.debug("Handing specification with %d keys to %s", len(args), self.label)
        return shaper(engine(deepcopy(dict(args))))
