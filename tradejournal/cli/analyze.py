"""Analysis commands for tradejournal CLI.

Renders the analytics engine's results as rich tables and panels. Every
command accepts the shared filter options (--period, --range, --timeframe,
--strategy).
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import (
    equity_curve,
    group_by,
    monthly_buckets,
    pnl_series,
    profit_distribution,
    risk_distribution,
    strategy_patterns,
    summarize,
    summarize_risk,
    top_symbols,
    y_axis_range,
)
from tradejournal.analytics.filters import ALL_STRATEGIES, TradeFilter
from tradejournal.cli.common import (
    console,
    currency,
    empty_panel,
    filter_options,
    format_money,
    get_config,
    get_journal,
)
from tradejournal.models import GroupStats


def _load(trade_filter: TradeFilter) -> tuple[dict, list]:
    config = get_config()
    journal = get_journal(config)
    return config, journal.filtered_trades(trade_filter)


def _describe(trade_filter: TradeFilter) -> str:
    parts = []
    if trade_filter.period is not None:
        parts.append(trade_filter.period.value)
    if trade_filter.date_filter is not None:
        parts.append(trade_filter.date_filter.value)
    if trade_filter.timeframe is not None:
        parts.append(trade_filter.timeframe.value)
    if trade_filter.strategy != ALL_STRATEGIES:
        parts.append(trade_filter.strategy)
    return ", ".join(parts) if parts else "All trades"


def _group_table(title: str, key_label: str, stats: list[GroupStats], ccy: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column(key_label, style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg P/L", justify="right")
    table.add_column("Total P/L", justify="right")
    table.add_column("Streak", justify="right")
    table.add_column("Best", justify="right")

    for stat in stats:
        key = getattr(stat.key, "value", stat.key)
        table.add_row(
            str(key) or "(none)",
            str(stat.trade_count),
            f"{stat.win_rate:.1f}%",
            format_money(stat.average_profit, ccy),
            format_money(stat.total_profit_loss, ccy),
            str(stat.current_win_streak),
            str(stat.max_win_streak),
        )
    return table


@click.command()
@filter_options
def summary(trade_filter: TradeFilter) -> None:
    """Show headline performance statistics.

    \b
    Examples:
      tradejournal summary
      tradejournal summary --period month --strategy "Price Action"
    """
    config, trades = _load(trade_filter)
    ccy = currency(config)
    stats = summarize(trades)

    pf_text = f"{stats.profit_factor:.2f}" if stats.profit_factor else "-"
    summary_text = (
        f"[bold]Performance[/bold] [dim]({_describe(trade_filter)})[/dim]\n\n"
        f"Total P/L:     {format_money(stats.total_profit_loss, ccy)}\n"
        f"Win Rate:      {stats.win_rate:.1f}%\n"
        f"Profit Factor: {pf_text}\n"
        f"Avg R:R:       {stats.average_risk_reward:.2f}\n"
        f"{'─' * 30}\n"
        f"Avg Trade:     {format_money(stats.average_trade, ccy)}\n"
        f"Largest Win:   {format_money(stats.largest_win, ccy)}\n"
        f"Largest Loss:  {format_money(stats.largest_loss, ccy)}\n\n"
        f"[dim]Trades: {stats.trade_count}[/dim]"
    )

    console.print(Panel(
        summary_text,
        title="[bold cyan]Summary[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@filter_options
def equity(trade_filter: TradeFilter) -> None:
    """Show the cumulative equity curve.

    \b
    Examples:
      tradejournal equity --period quarter
    """
    config, trades = _load(trade_filter)
    points = equity_curve(trades)

    if not points:
        empty_panel("Equity Curve", "No trades available")
        return

    ccy = currency(config)
    low, high = y_axis_range(points)

    table = Table(title="Equity Curve", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="dim")
    table.add_column("Equity", justify="right")
    table.add_column("", min_width=20)

    span = high - low
    for point in points:
        filled = int((point.total - low) / span * 20) if span else 0
        color = "green" if point.total >= 0 else "red"
        table.add_row(
            point.date.strftime("%Y-%m-%d %H:%M"),
            format_money(point.total, ccy),
            f"[{color}]{'█' * filled}[/{color}]",
        )

    console.print(table)
    console.print(f"\n[dim]Range: {ccy}{low:,.2f} to {ccy}{high:,.2f}[/dim]")


@click.command()
@filter_options
def pnl(trade_filter: TradeFilter) -> None:
    """Show profit/loss per trade over time.

    \b
    Examples:
      tradejournal pnl --range 30d
    """
    config, trades = _load(trade_filter)
    points = pnl_series(trades)

    if not points:
        empty_panel("Profit/Loss Over Time", "No trades available")
        return

    ccy = currency(config)
    largest = max(abs(p.total) for p in points)

    table = Table(title="Profit/Loss Over Time", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="dim")
    table.add_column("P/L", justify="right")
    table.add_column("", min_width=20)

    for point in points:
        filled = int(abs(point.total) / largest * 20) if largest else 0
        color = "green" if point.total >= 0 else "red"
        table.add_row(
            point.date.strftime("%Y-%m-%d %H:%M"),
            format_money(point.total, ccy),
            f"[{color}]{'█' * filled}[/{color}]",
        )

    console.print(table)


@click.command()
@filter_options
def monthly(trade_filter: TradeFilter) -> None:
    """Show P/L summed per calendar month."""
    config, trades = _load(trade_filter)
    buckets = monthly_buckets(trades)

    if not buckets:
        empty_panel("Monthly Performance")
        return

    ccy = currency(config)
    table = Table(title="Monthly Performance", show_header=True, header_style="bold cyan")
    table.add_column("Month", style="bold")
    table.add_column("P/L", justify="right")

    for bucket in buckets:
        table.add_row(bucket.label, format_money(bucket.total, ccy))

    console.print(table)


@click.command()
@filter_options
def strategies(trade_filter: TradeFilter) -> None:
    """Show win rate and streaks per strategy, best first."""
    config, trades = _load(trade_filter)
    patterns = strategy_patterns(trades)

    if not patterns:
        empty_panel("Strategies")
        return

    console.print(_group_table("Strategy Performance", "Strategy", patterns, currency(config)))


@click.command()
@filter_options
def timeframes(trade_filter: TradeFilter) -> None:
    """Show win rate per chart timeframe."""
    config, trades = _load(trade_filter)
    stats = list(group_by(trades, "timeframe").values())

    if not stats:
        empty_panel("Timeframes")
        return

    console.print(_group_table("Timeframe Performance", "Timeframe", stats, currency(config)))


@click.command()
@click.option(
    "--top",
    "top_n",
    type=click.IntRange(min=1),
    default=None,
    help="Number of symbols to show (default from config, 10).",
)
@filter_options
def symbols(trade_filter: TradeFilter, top_n: Optional[int]) -> None:
    """Show the most traded symbols."""
    config, trades = _load(trade_filter)
    n = top_n if top_n is not None else config.get("display", {}).get("top_symbols", 10)
    ranked = top_symbols(trades, n)

    if not ranked:
        empty_panel("Symbols")
        return

    console.print(_group_table("Top Symbols", "Symbol", ranked, currency(config)))


@click.command()
@filter_options
def risk(trade_filter: TradeFilter) -> None:
    """Show risk statistics and the risk distribution."""
    config, trades = _load(trade_filter)

    if not trades:
        empty_panel("Risk Analysis")
        return

    ccy = currency(config)
    stats = summarize_risk(trades)

    console.print(Panel(
        f"Avg R:R:           {stats.average_risk_reward:.2f}\n"
        f"Max Drawdown:      {stats.max_drawdown:.1f}%\n"
        f"Avg Risk / Trade:  {ccy}{stats.average_risk:,.2f}\n"
        f"Profitable Trades: {stats.profitable_ratio:.1f}%",
        title="[bold cyan]Risk Analysis[/bold cyan]",
        border_style="cyan",
    ))

    table = Table(title="Risk Distribution", show_header=True, header_style="bold cyan")
    table.add_column("Risk", justify="right")
    table.add_column("Trades", justify="right")
    for bucket in risk_distribution(trades):
        table.add_row(f"{ccy}{bucket.risk:,.0f}", str(bucket.count))

    console.print(table)


@click.command()
@filter_options
def distribution(trade_filter: TradeFilter) -> None:
    """Show how trades spread across profit bands."""
    _, trades = _load(trade_filter)
    bands = profit_distribution(trades)

    if not bands:
        empty_panel("Trade Distribution")
        return

    table = Table(title="Trade Distribution", show_header=True, header_style="bold cyan")
    table.add_column("Band", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Share", justify="right")

    for band in bands:
        color = "green" if "Win" in band.name else "red"
        table.add_row(
            f"[{color}]{band.name}[/{color}]",
            str(band.count),
            f"{band.percentage:.0f}%",
        )

    console.print(table)
