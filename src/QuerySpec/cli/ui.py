"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv

from QuerySpec.cli.runner import CommandRunner
from QuerySpec.config import load_config

_signal_option = click.option(
    "--signal",
    "signals",
    multiple=True,
    metavar="KEY=VALUE",
    help="Signal value for the configured bindings; repeat a key to pass a list.",
)


def parse_signals(pairs: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` pairs into a signal mapping.

    Repeated keys collect their values into a list.

    Raises:
        click.BadParameter: If a pair has no ``=`` or an empty key.
    """
    signals: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--signal")
        if key not in signals:
            signals[key] = value
        elif isinstance(signals[key], list):
            signals[key].append(value)
        else:
            signals[key] = [signals[key], value]
    return signals


def _echo_json(document: Any) -> None:
    click.echo(json.dumps(document, indent=2, ensure_ascii=False, default=str))


@click.group(help="QuerySpec: build and explain query specifications.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    # Load environment variables from .env file
    load_dotenv()

    cfg = load_config(config_path)
    ctx.obj = cfg


@cli.command("explain")
@_signal_option
@click.pass_context
def explain_cmd(ctx: click.Context, signals: tuple[str, ...]) -> None:
    """Print the audit document (specification, calls, warnings, bindings) as JSON."""
    runner = CommandRunner(ctx.obj)
    _echo_json(runner.run_explain(action=ctx.command.name, signals=parse_signals(signals)))


@cli.command("args")
@_signal_option
@click.pass_context
def args_cmd(ctx: click.Context, signals: tuple[str, ...]) -> None:
    """Print only the finished specification as JSON."""
    runner = CommandRunner(ctx.obj)
    _echo_json(runner.run_args(action=ctx.command.name, signals=parse_signals(signals)))
