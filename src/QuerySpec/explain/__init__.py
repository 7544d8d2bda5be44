"""Explainability: advisory warnings and the exported audit document."""

from __future__ import annotations

from QuerySpec.explain.document import build_explain
from QuerySpec.explain.warnings import post_warnings, term_warnings

__all__ = ["build_explain", "post_warnings", "term_warnings"]
