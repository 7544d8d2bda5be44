from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CallLogEntry:
    """One recorded fluent call.

    Attributes:
        name: Method name, or ``macro:<name>`` for registered extensions.
        params: Snapshot of the call arguments taken at call time.
    """

    name: str
    params: tuple[Any, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "params": list(self.params)}


@dataclass(frozen=True, slots=True)
class BindingLogEntry:
    """Outcome of evaluating one binding.

    Attributes:
        key: Signal key the binding was configured for.
        applied: Whether the specification changed.
        reason: ``applied``, ``empty:null``, ``empty:string``, ``empty:array``
            or ``skipped``.
        value: Redacted summary of the raw signal value (type and size only).
    """

    key: str
    applied: bool
    reason: str
    value: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "applied": self.applied,
            "reason": self.reason,
            "value": self.value,
        }
