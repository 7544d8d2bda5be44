"""Signal and binding configuration.

Each ``bindings`` entry maps a signal key to ``{bind: <kind>, ...options}``
and compiles to the same binding ``Bind`` would produce, so YAML, a plain
map and the fluent ``Binder`` are interchangeable.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Mapping

from QuerySpec.bindings.bind import ID_LIST_METHODS, Bind, Binding
from QuerySpec.config.common import (
    expect_bool,
    expect_mapping,
    expect_optional_str,
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)

BindingFactory = Callable[[str, Mapping[str, Any]], Binding]


@dataclass(frozen=True, slots=True)
class BindingSpec:
    """One configured binding: signal key, kind and kind-specific options."""

    key: str
    kind: str
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SignalsConfig:
    """Where signals come from besides the command line.

    Attributes:
        env_prefix: When set, environment variables ``<prefix><KEY>`` are read
            as a fallback signal source.
    """

    env_prefix: str | None = None


@dataclass(frozen=True, slots=True)
class BindingsConfig:
    """Ordered binding specs."""

    specs: tuple[BindingSpec, ...] = ()


def load_signals(raw: Mapping[str, Any]) -> SignalsConfig:
    section = get_section(raw, "signals", required=False)
    prefix = expect_optional_str(get_optional_value(section, "env_prefix", None), "signals.env_prefix")
    return SignalsConfig(env_prefix=prefix)


def load_bindings(raw: Mapping[str, Any]) -> BindingsConfig:
    """Load the optional ``bindings`` section in file order.

    Raises:
        TypeError: If an entry is not an object or ``bind`` is not a string.
        ValueError: If an entry has no ``bind`` kind.
    """
    section = get_section(raw, "bindings", required=False)
    specs: list[BindingSpec] = []
    for key, entry in section.items():
        config_key = f"bindings.{key}"
        options = expect_mapping(entry, config_key)
        kind = expect_str(get_required_value(options, "bind", f"{config_key}.bind"), f"{config_key}.bind")
        options.pop("bind")
        specs.append(BindingSpec(key=str(key), kind=kind.strip(), options=options))
    return BindingsConfig(specs=tuple(specs))


def check_bindings(config: BindingsConfig) -> None:
    """Validate binding kinds and kind-specific options.

    Raises:
        ValueError: If a kind is unknown or options are invalid.
        TypeError: If option types are invalid.
    """
    for spec in config.specs:
        build_binding(spec)


def build_binding(spec: BindingSpec) -> Binding:
    """Compile one binding spec.

    Raises:
        ValueError: If ``spec.kind`` is not registered.
    """
    factory = _binding_factories().get(spec.kind)
    if factory is None:
        raise ValueError(f"Unsupported binding kind in config.bindings.{spec.key}: {spec.kind}")
    return factory(spec.key, spec.options)


def build_binding_map(config: BindingsConfig) -> dict[str, Binding]:
    """Compile every spec into a signal key -> binding map."""
    return {spec.key: build_binding(spec) for spec in config.specs}


def supported_binding_kinds() -> tuple[str, ...]:
    return tuple(_binding_factories().keys())


def _binding_factories() -> dict[str, BindingFactory]:
    return {
        "paged": _build_paged,
        "search": _build_search,
        "tax": _build_tax,
        "order_by": _build_order_by,
        "meta_num": _build_meta_num,
        "date_after": _build_date_after,
        "date_before": _build_date_before,
        "ids": _build_ids,
    }


def _build_paged(key: str, options: Mapping[str, Any]) -> Binding:
    del options
    return Bind.paged(key)


def _build_search(key: str, options: Mapping[str, Any]) -> Binding:
    del options
    return Bind.search(key)


def _build_tax(key: str, options: Mapping[str, Any]) -> Binding:
    prefix = f"bindings.{key}"
    return Bind.tax(
        expect_str(get_optional_value(options, "taxonomy", key), f"{prefix}.taxonomy"),
        expect_str(get_optional_value(options, "field", "slug"), f"{prefix}.field"),
        expect_str(get_optional_value(options, "operator", "IN"), f"{prefix}.operator"),
    )


def _build_order_by(key: str, options: Mapping[str, Any]) -> Binding:
    prefix = f"bindings.{key}"
    overrides = expect_mapping(get_optional_value(options, "overrides", {}), f"{prefix}.overrides")
    for field_name, order in overrides.items():
        expect_str(order, f"{prefix}.overrides.{field_name}")
    return Bind.order_by(
        expect_str(get_optional_value(options, "default", "date"), f"{prefix}.default"),
        expect_str(get_optional_value(options, "default_order", "DESC"), f"{prefix}.default_order"),
        overrides,
    )


def _build_meta_num(key: str, options: Mapping[str, Any]) -> Binding:
    prefix = f"bindings.{key}"
    meta_key = expect_str(get_required_value(options, "meta_key", f"{prefix}.meta_key"), f"{prefix}.meta_key")
    if not meta_key.strip():
        raise ValueError(f"{prefix}.meta_key must not be empty")
    return Bind.meta_num(meta_key, expect_str(get_optional_value(options, "compare", ">="), f"{prefix}.compare"))


def _build_date_after(key: str, options: Mapping[str, Any]) -> Binding:
    inclusive = expect_bool(get_optional_value(options, "inclusive", True), f"bindings.{key}.inclusive")
    return Bind.date_after(inclusive)


def _build_date_before(key: str, options: Mapping[str, Any]) -> Binding:
    inclusive = expect_bool(get_optional_value(options, "inclusive", True), f"bindings.{key}.inclusive")
    return Bind.date_before(inclusive)


def _build_ids(key: str, options: Mapping[str, Any]) -> Binding:
    method = expect_str(get_optional_value(options, "method", "where_in_ids"), f"bindings.{key}.method")
    if method not in ID_LIST_METHODS:
        raise ValueError(f"bindings.{key}.method must be one of {sorted(ID_LIST_METHODS)}")
    return Bind.ids(method)
