"""Builder domain configuration: which builder to start and how to seed it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from QuerySpec.config.common import expect_mapping, expect_str, get_optional_value, get_section

_ALLOWED_TYPES = {"posts", "terms"}


@dataclass(frozen=True, slots=True)
class BuilderConfig:
    """Store validated builder settings.

    Attributes:
        type: ``posts`` or ``terms``.
        seed: Post type/taxonomy name(s), an initial specification, or None.
    """

    type: str = "posts"
    seed: str | list[str] | dict[str, Any] | None = None


def load_builder(raw: Mapping[str, Any]) -> BuilderConfig:
    """Load the optional ``builder`` section.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "builder", required=False)
    builder_type = expect_str(get_optional_value(section, "type", "posts"), "builder.type").strip().lower()
    return BuilderConfig(type=builder_type, seed=_load_seed(section.get("seed")))


def check_builder(config: BuilderConfig) -> None:
    """Validate builder domain constraints.

    Raises:
        ValueError: If the builder type is unknown.
    """
    if config.type not in _ALLOWED_TYPES:
        raise ValueError(f"builder.type must be one of {sorted(_ALLOWED_TYPES)}")


def _load_seed(value: Any) -> str | list[str] | dict[str, Any] | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list):
        for idx, item in enumerate(value):
            expect_str(item, f"builder.seed[{idx}]")
        return list(value)
    return expect_mapping(value, "builder.seed")
