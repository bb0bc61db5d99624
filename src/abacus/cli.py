"""
ABACUS CLI.

A small host around the formula interpreter:

    abacus eval "1+2*3^2"       # 19
    abacus eval -- "-2^2"       # formulas starting with '-' need '--'
    abacus tree "3!!"           # 3!!
    abacus selftest             # replay the built-in case table
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from abacus._version import get_version
from abacus.core.calculator import SELF_TEST_CASES, calculate, run_self_test
from abacus.core.errors import AbacusError, ConfigError
from abacus.core.expression_lang import parse_expr
from abacus.core.manifest import MANIFEST_FILENAME, normalize_log_level, resolve_manifest
from abacus.core.strings import format_number

app = typer.Typer(
    name="abacus",
    help="Arithmetic formula interpreter",
    no_args_is_help=True,
)
console = Console(stderr=True)

LOG_LEVEL_ENV = "ABACUS_LOG_LEVEL"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"ABACUS version {get_version()}")
        typer.echo(
            f"Python {platform.python_implementation()} {platform.python_version()}"
        )
        raise typer.Exit()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def _fail(error: AbacusError) -> NoReturn:
    console.print(f"[red]{escape(error.display())}[/red]")
    raise typer.Exit(1)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help=f"Configuration file (default: ./{MANIFEST_FILENAME} if present)",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--permissive",
        help="Reject unrecognized characters instead of dropping them",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help=f"Logging level (default: ${LOG_LEVEL_ENV}, then the config file)",
    ),
) -> None:
    """Load configuration and set up logging for every command."""
    try:
        if config is not None and not config.exists():
            raise ConfigError(f"config file not found: {config}")
        manifest = resolve_manifest(config)
        level = log_level or os.environ.get(LOG_LEVEL_ENV)
        if level:
            manifest.log.level = normalize_log_level(level)
    except ConfigError as e:
        _fail(e)

    if strict is not None:
        manifest.lexer.reject_unknown_characters = strict

    configure_logging(manifest.log.level)
    ctx.obj = manifest


@app.command("eval")
def cmd_eval(
    ctx: typer.Context,
    formulas: list[str] = typer.Argument(help="Formulas to evaluate (e.g., '5/2')"),
) -> None:
    """Evaluate formulas and print one result per line."""
    strict = ctx.obj.lexer.reject_unknown_characters
    failed = False

    for source in formulas:
        try:
            value = calculate(source, strict=strict)
        except AbacusError as e:
            failed = True
            typer.echo(e.display())
            if e.context:
                console.print(f"[dim]{escape(e.context.format())}[/dim]")
            continue
        typer.echo(format_number(value))

    if failed:
        raise typer.Exit(1)


@app.command("tree")
def cmd_tree(
    ctx: typer.Context,
    formula: str = typer.Argument(help="Formula to parse"),
) -> None:
    """Show how a formula is grouped, fully parenthesized."""
    try:
        expr = parse_expr(formula, strict=ctx.obj.lexer.reject_unknown_characters)
    except AbacusError as e:
        if e.context:
            console.print(f"[dim]{escape(e.context.format())}[/dim]")
        _fail(e)
    typer.echo(str(expr))


@app.command("selftest")
def cmd_selftest(ctx: typer.Context) -> None:
    """Replay the built-in formula table and report mismatches."""
    failures = run_self_test(ctx.obj.selftest.tolerance)
    total = len(SELF_TEST_CASES)

    if not failures:
        console.print(f"[green]All {total} self-test cases passed[/green]")
        return

    table = Table(title="Self-test failures", show_header=True, header_style="bold")
    table.add_column("Formula", style="cyan")
    table.add_column("Expected", justify="right")
    table.add_column("Got", justify="right", style="red")
    for failure in failures:
        table.add_row(
            escape(failure.source),
            format_number(failure.expected),
            escape(failure.output),
        )

    console.print()
    console.print(table)
    console.print(f"\n[red]{len(failures)} of {total} self-test cases failed[/red]")
    raise typer.Exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
