"""Main CLI entry point for tradejournal.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import importlib
import logging

import click
from rich.logging import RichHandler


class LazyGroup(click.Group):
    """A click Group that imports command modules on first use."""

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = getattr(module, cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Trades
    "add": "tradejournal.cli.trade",
    "trades": "tradejournal.cli.trade",
    "show": "tradejournal.cli.trade",
    "delete": "tradejournal.cli.trade",
    "seed": "tradejournal.cli.trade",
    # Analysis
    "summary": "tradejournal.cli.analyze",
    "equity": "tradejournal.cli.analyze",
    "pnl": "tradejournal.cli.analyze",
    "monthly": "tradejournal.cli.analyze",
    "strategies": "tradejournal.cli.analyze",
    "timeframes": "tradejournal.cli.analyze",
    "symbols": "tradejournal.cli.analyze",
    "risk": "tradejournal.cli.analyze",
    "distribution": "tradejournal.cli.analyze",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """tradejournal - record crypto trades and analyze your performance.

    \b
    Quick Start:
      tradejournal add BTC/USDT --entry 42000 --exit 43500 --qty 0.1 --sl 41000 --tp 44000
      tradejournal summary        # Win rate, profit factor, R:R
      tradejournal equity         # Cumulative P/L curve
      tradejournal strategies     # Performance per strategy
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
