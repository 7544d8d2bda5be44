"""Command runner for coordinating CLI execution.

Manages logging configuration, builder construction from config, signal
sources, and error handling for command execution.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Mapping

import click

from QuerySpec.bindings.source import (
    ArraySignalSource,
    ChainedSignalSource,
    EnvironmentSignalSource,
    SignalSource,
)
from QuerySpec.builders.base import BaseBuilder
from QuerySpec.builders.posts import PostsQuery
from QuerySpec.builders.terms import TermsQuery
from QuerySpec.config import AppConfig, build_binding_map
from QuerySpec.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Handles logging configuration, builder creation, binding evaluation and
    error handling for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def build(self, signals: Mapping[str, Any]) -> BaseBuilder:
        """Create the configured builder and apply configured bindings.

        Args:
            signals: Signals given on the command line.

        Returns:
            The builder after bindings ran.
        """
        builder = self._start_builder()
        bindings = build_binding_map(self.config.bindings)
        if bindings:
            builder = builder.bind_signals(bindings, self._signal_source(signals))
        return builder

    def run_explain(self, action: str, signals: Mapping[str, Any]) -> dict[str, Any]:
        """Return the audit document for the configured builder.

        Raises:
            click.Abort: When building fails.
        """
        return self._run(action, signals, lambda builder: builder.explain())

    def run_args(self, action: str, signals: Mapping[str, Any]) -> dict[str, Any]:
        """Return the finished specification for the configured builder.

        Raises:
            click.Abort: When building fails.
        """
        return self._run(action, signals, lambda builder: builder.to_args())

    def _run(
        self,
        action: str,
        signals: Mapping[str, Any],
        render: Callable[[BaseBuilder], dict[str, Any]],
    ) -> dict[str, Any]:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            log.debug("Building %s query with %d CLI signals", self.config.builder.type, len(signals))
            builder = self.build(signals)
            document = render(builder)
            log.info("Built specification with %d keys", len(builder.to_args()))
            return document
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e

    def _start_builder(self) -> BaseBuilder:
        seed = self.config.builder.seed
        if self.config.builder.type == "terms":
            return TermsQuery.prepare(seed)
        return PostsQuery.prepare(seed)

    def _signal_source(self, signals: Mapping[str, Any]) -> SignalSource:
        cli_source = ArraySignalSource(signals)
        prefix = self.config.signals.env_prefix
        if prefix is None:
            return cli_source
        return ChainedSignalSource(cli_source, EnvironmentSignalSource(prefix))
