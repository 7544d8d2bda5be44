"""Shared builder machinery.

A builder owns one ``ArgumentStore`` plus its audit state (call log, binding
log, recorded advisories). Filter concerns are stateless helper modules that
operate on the store; builder methods wire them together and log each call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from copy import deepcopy
from typing import Any, ClassVar, Mapping, Protocol

from QuerySpec.bindings.binder import Binder
from QuerySpec.bindings.pipeline import run_bindings
from QuerySpec.bindings.source import SignalSource
from QuerySpec.concerns.meta import append_meta, meta_clause
from QuerySpec.concerns.ordering import normalise_order
from QuerySpec.concerns.search import Sanitizer
from QuerySpec.core.args import ArgumentStore
from QuerySpec.core.clauses import AND, OR
from QuerySpec.core.extensions import Extension, ExtensionRegistry
from QuerySpec.core.models import BindingLogEntry, CallLogEntry
from QuerySpec.explain.document import build_explain
from QuerySpec.utils.log import get_logger

logger = get_logger("builders")


class TerminalAdapter(Protocol):
    """Anything that turns a finished specification into a result."""

    def run(self, args: dict[str, Any]) -> Any:
        raise NotImplementedError


class BaseBuilder(ABC):
    """Fluent specification builder.

    Concrete builders supply their own state warnings. Subclasses get their
    own extension registry, so extensions registered on one builder type are
    never visible on another.
    """

    sanitizer: ClassVar[Sanitizer | None] = None
    _registry: ClassVar[ExtensionRegistry] = ExtensionRegistry("BaseBuilder")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = ExtensionRegistry(cls.__name__)

    def __init__(self, seed: Mapping[str, Any] | None = None, *, sanitizer: Sanitizer | None = None) -> None:
        self._store = ArgumentStore(seed)
        self._calls: list[CallLogEntry] = []
        self._binding_log: list[BindingLogEntry] = []
        self._advisories: list[str] = []
        self._sanitizer = sanitizer if sanitizer is not None else type(self).sanitizer

    # ------------------------------------------------------------------
    # Extension dispatch
    # ------------------------------------------------------------------

    @classmethod
    def extend(cls, name: str, fn: Extension) -> None:
        """Register ``fn`` as a late-bound method called as ``builder.<name>(...)``.

        ``fn`` receives the builder as its first argument. A ``None`` return
        value chains the builder itself.

        Raises:
            ValueError: If ``name`` is empty or shadows a built-in method.
            TypeError: If ``fn`` is not callable.
        """
        if name and hasattr(cls, name):
            raise ValueError(f"{cls.__name__} extension [{name}] would shadow a built-in method.")
        cls._registry.register(name, fn)

    @classmethod
    def has_extension(cls, name: str) -> bool:
        return cls._registry.has(name)

    @classmethod
    def flush_extensions(cls) -> None:
        """Remove every extension registered on this builder type."""
        cls._registry.clear()

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        fn = type(self)._registry.get(name)

        def call(*args: Any, **kwargs: Any) -> Any:
            self._record(f"macro:{name}", *args)
            result = fn(self, *args, **kwargs)
            return self if result is None else result

        return call

    # ------------------------------------------------------------------
    # Audit state
    # ------------------------------------------------------------------

    def _record(self, name: str, *params: Any) -> None:
        self._calls.append(CallLogEntry(name=name, params=tuple(deepcopy(list(params)))))

    def _warn(self, message: str) -> None:
        logger.debug("Advisory: %s", message)
        self._advisories.append(message)

    @abstractmethod
    def _state_warnings(self, args: Mapping[str, Any]) -> list[str]:
        """Return advisories derived from the final specification alone."""

    def _direction(self, order: object, default: str, method: str) -> str:
        direction, advisory = normalise_order(order, default, method)
        if advisory:
            self._warn(advisory)
        return direction

    # ------------------------------------------------------------------
    # Shared operations
    # ------------------------------------------------------------------

    def to_args(self) -> dict[str, Any]:
        """Return a deep copy of the accumulated specification."""
        return self._store.to_specification()

    def where_meta(self, key: str, value: Any, compare: str = "=", type_: str = "CHAR") -> BaseBuilder:
        """Append a meta clause; the group relation defaults to AND."""
        self._record("where_meta", key, value, compare, type_)
        append_meta(self._store, meta_clause(key, value, compare, type_), AND)
        return self

    def or_where_meta(self, key: str, value: Any, compare: str = "=", type_: str = "CHAR") -> BaseBuilder:
        """Append a meta clause and force the group relation to OR."""
        self._record("or_where_meta", key, value, compare, type_)
        append_meta(self._store, meta_clause(key, value, compare, type_), AND, OR)
        return self

    def when(
        self,
        condition: Any,
        then: Callable[[Any], Any],
        otherwise: Callable[[Any], Any] | None = None,
    ) -> BaseBuilder:
        """Run ``then(builder)`` if ``condition`` is truthy, else ``otherwise``."""
        self._record("when", bool(condition))
        callback = then if condition else otherwise
        if callback is not None:
            callback(self)
        return self

    def unless(
        self,
        condition: Any,
        then: Callable[[Any], Any],
        otherwise: Callable[[Any], Any] | None = None,
    ) -> BaseBuilder:
        self._record("unless", bool(condition))
        callback = otherwise if condition else then
        if callback is not None:
            callback(self)
        return self

    def tap(self, callback: Callable[[Any], Any]) -> BaseBuilder:
        """Call ``callback(builder)``; its return value is ignored."""
        self._record("tap")
        callback(self)
        return self

    def tap_args(self, fn: Callable[[dict[str, Any]], Mapping[str, Any]]) -> BaseBuilder:
        """Replace the whole specification with ``fn(copy_of_args)``.

        Raises:
            TypeError: If ``fn`` does not return a mapping.
        """
        self._record("tap_args")
        result = fn(self.to_args())
        if not isinstance(result, Mapping):
            raise TypeError(f"tap_args() callback must return a mapping, got {type(result).__name__}.")
        self._store.replace(deepcopy(dict(result)))
        return self

    def apply(self, scope: Callable[..., Mapping[str, Any]], *params: Any) -> BaseBuilder:
        """Merge the partial mapping returned by ``scope(copy_of_args, *params)``.

        Raises:
            TypeError: If ``scope`` does not return a mapping.
        """
        self._record("apply", *params)
        partial = scope(self.to_args(), *params)
        if not isinstance(partial, Mapping):
            raise TypeError(f"apply() scope must return a mapping, got {type(partial).__name__}.")
        self._store.merge(deepcopy(dict(partial)))
        return self

    def bind_signals(
        self,
        bindings: Mapping[str, Any] | Callable[[Binder], Any],
        source: SignalSource,
    ) -> BaseBuilder:
        """Apply bindings to signals read from ``source``.

        Args:
            bindings: Signal key -> binding map, or a callable that configures
                a ``Binder``.
            source: Signal source; only the configured keys are read.

        Returns:
            The builder returned by the last binding.

        Raises:
            TypeError: If ``bindings`` has the wrong shape, a binding is not
                callable, or a binding returns a non-builder.
        """
        if isinstance(bindings, Mapping):
            binding_map = dict(bindings)
        elif callable(bindings):
            binder = Binder()
            bindings(binder)
            binding_map = binder.to_map()
        else:
            raise TypeError(f"bind_signals() expects a mapping or a callable, got {type(bindings).__name__}.")

        self._record("bind_signals", list(binding_map))
        builder, entries = run_bindings(self, binding_map, source)
        builder._binding_log = entries
        return builder

    def explain(self) -> dict[str, Any]:
        """Return ``{specification, calls, warnings[, bindings]}``."""
        args = self.to_args()
        return build_explain(
            specification=args,
            calls=self._calls,
            state_warnings=self._state_warnings(args),
            recorded_warnings=self._advisories,
            bindings=self._binding_log,
        )

    def run(self, adapter: TerminalAdapter) -> Any:
        """Hand a copy of the specification to ``adapter``."""
        return adapter.run(self.to_args())
