"""Fluent specification builders."""

from __future__ import annotations

from QuerySpec.builders.base import BaseBuilder, TerminalAdapter
from QuerySpec.builders.posts import PostsQuery, posts
from QuerySpec.builders.terms import TermsQuery, terms

__all__ = ["BaseBuilder", "PostsQuery", "TerminalAdapter", "TermsQuery", "posts", "terms"]
