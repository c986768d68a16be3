"""CLI package for the dimension-reduction comparison."""

import typer

app = typer.Typer(
    name="drcompare",
    help="Simulate and rank dimension-reduction algorithm comparisons",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)

# Register commands at import time so the app can be used programmatically
# (e.g., in tests) without invoking the full CLI entrypoint.
from drcompare.cli.compare import run_command, show_config_command  # noqa: E402

app.command("run")(run_command)
app.command("show-config")(show_config_command)

__all__ = ["app"]
