from __future__ import annotations

"""Public configuration API for QuerySpec."""

from QuerySpec.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from QuerySpec.config.bindings import BindingsConfig, BindingSpec, SignalsConfig, build_binding_map
from QuerySpec.config.builder import BuilderConfig
from QuerySpec.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "BuilderConfig",
    "SignalsConfig",
    "BindingsConfig",
    "BindingSpec",
    "AppConfig",
    "build_binding_map",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
