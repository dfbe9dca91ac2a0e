"""Shared helpers for tradejournal CLI commands."""

import functools
from typing import Callable, Optional

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal.analytics.filters import ALL_STRATEGIES, DateFilter, Period, TradeFilter
from tradejournal.models import TimeFrame

console = Console()

PERIOD_CHOICES = {
    "week": Period.WEEK,
    "month": Period.MONTH,
    "quarter": Period.QUARTER,
    "year": Period.YEAR,
    "all": Period.ALL_TIME,
}

RANGE_CHOICES = {
    "7d": DateFilter.LAST_7_DAYS,
    "30d": DateFilter.LAST_30_DAYS,
    "90d": DateFilter.LAST_3_MONTHS,
    "180d": DateFilter.LAST_6_MONTHS,
    "365d": DateFilter.LAST_YEAR,
    "all": DateFilter.ALL_TIME,
}

TIMEFRAME_CHOICES = [tf.value for tf in TimeFrame]


def get_config() -> dict:
    """Lazily load configuration."""
    from tradejournal.config import load_config

    return load_config()


def get_journal(config: Optional[dict] = None):
    """Get a JournalService backed by the configured data store."""
    from tradejournal.config import get_db_path
    from tradejournal.db.store import DataStore
    from tradejournal.journal import JournalService

    config = config or get_config()
    journal = JournalService(DataStore(get_db_path(config)))
    if config.get("journal", {}).get("seed_sample_data", False):
        journal.seed_sample_data()
    return journal


def currency(config: dict) -> str:
    return config.get("display", {}).get("currency", "$")


def format_money(value: float, symbol: str = "$") -> str:
    """Format a P/L value with sign and color markup."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}{symbol}{abs(value):,.2f}[/{color}]"


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def empty_panel(title: str, message: str = "No trades found") -> None:
    console.print(Panel(
        f"[dim]{message}[/dim]",
        title=f"[bold]{title}[/bold]",
        border_style="dim",
    ))


def build_filter(
    period: Optional[str],
    date_range: Optional[str],
    timeframe: Optional[str],
    strategy: str,
) -> TradeFilter:
    """Turn CLI option values into a TradeFilter."""
    return TradeFilter(
        period=PERIOD_CHOICES[period] if period else None,
        date_filter=RANGE_CHOICES[date_range] if date_range else None,
        timeframe=TimeFrame(timeframe) if timeframe else None,
        strategy=strategy,
    )


def filter_options(func: Callable) -> Callable:
    """Add the shared filter options and pass a ``trade_filter`` argument."""

    @click.option(
        "--period", "-p",
        type=click.Choice(list(PERIOD_CHOICES)),
        default=None,
        help="Calendar window (week, month, quarter, year, all).",
    )
    @click.option(
        "--range", "-r", "date_range",
        type=click.Choice(list(RANGE_CHOICES)),
        default=None,
        help="Rolling window in days (7d, 30d, 90d, 180d, 365d, all).",
    )
    @click.option(
        "--timeframe", "-t",
        type=click.Choice(TIMEFRAME_CHOICES),
        default=None,
        help="Only trades taken on this timeframe.",
    )
    @click.option(
        "--strategy", "-s",
        default=ALL_STRATEGIES,
        show_default=True,
        help="Only trades with this strategy label.",
    )
    @functools.wraps(func)
    def wrapper(period, date_range, timeframe, strategy, **kwargs):
        trade_filter = build_filter(period, date_range, timeframe, strategy)
        return func(trade_filter=trade_filter, **kwargs)

    return wrapper
