"""
Command-line interface for explorer-matrix-lib.

Inspect decision matrices and validate explorer programs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ex_ui.commands.matrix import create_matrix_app
from ex_ui.commands.program import create_program_app
from ex_ui.dependencies import CliContext, configure_logging, create_ui

ctx_store = CliContext()

app = typer.Typer(help="Inspect data explorer decision matrices and programs.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="JSON settings file (defaults to $EX_CONFIG_PATH).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs and error reports as JSON lines."),
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Record output instead of printing it (useful in tests).",
    ),
) -> None:
    """Global entry point configuring logging, settings and output."""
    configure_logging(debug=debug, json=json_logs or None, force=True)
    ctx_store.reset(config, json_errors=json_logs)
    if headless:
        ctx_store.ui = create_ui(headless=True)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.add_typer(create_matrix_app(ctx_store), name="matrix")
app.add_typer(create_program_app(ctx_store), name="program")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
