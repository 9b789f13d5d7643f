"""Click CLI for Price Indicator Lab.

Entry point: ``indic`` (installed via pyproject.toml) or ``python -m app.cli``.
Series are passed as comma-separated numbers, oldest first.
"""

from __future__ import annotations

from typing import Optional

import click
import numpy as np
from rich.console import Console
from rich.table import Table

from app.config import get_config
from app.logging import get_logger

logger = get_logger(__name__)
console = Console()

_INDICATORS = ("sma", "ema", "rsi", "atr", "bollinger", "macd", "stochastic", "obv")
_NEEDS_HIGH_LOW = ("atr", "stochastic")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_series(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[list[float]]:
    """Click callback turning ``"1,2.5,3"`` into a list of floats."""
    if value is None:
        return None
    try:
        return [float(item) for item in value.split(",") if item.strip()]
    except ValueError:
        raise click.BadParameter("expected comma-separated numbers") from None


def _error(message: str) -> None:
    """Print a styled error message and exit."""
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise SystemExit(1)


def _defaults() -> dict:
    try:
        return get_config("indicators")
    except KeyError:
        return {}


def _or_default(value, cfg: dict, key: str, fallback):
    """Use *value* when it was given, else the configured *key* cast like *fallback*."""
    if value is not None:
        return value
    return type(fallback)(cfg.get(key, fallback))


def _series_table(title: str, columns: dict[str, np.ndarray], rows: int) -> Table:
    """Tabulate the last *rows* values of each series, aligned on the latest bar."""
    table = Table(title=title, show_lines=False)
    table.add_column("Bar", justify="right", style="dim")
    for name in columns:
        table.add_column(name, justify="right")

    depth = min(rows, max((len(v) for v in columns.values()), default=0))
    for offset in range(depth, 0, -1):
        cells = [f"-{offset - 1}" if offset > 1 else "last"]
        for values in columns.values():
            cells.append(f"{values[-offset]:.4f}" if offset <= len(values) else "")
        table.add_row(*cells)
    return table


def _trend_display(value: str) -> str:
    if value == "BULLISH":
        return "[green]BULLISH[/green]"
    if value == "BEARISH":
        return "[red]BEARISH[/red]"
    return f"[dim]{value}[/dim]"


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="price-indicator-lab")
def cli() -> None:
    """Price Indicator Lab -- moving averages, oscillators and trend signals."""


# ---------------------------------------------------------------------------
# compute
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("indicator", type=click.Choice(_INDICATORS))
@click.option("--closes", required=True, callback=_parse_series, help="Close prices.")
@click.option("--highs", default=None, callback=_parse_series, help="High prices.")
@click.option("--lows", default=None, callback=_parse_series, help="Low prices.")
@click.option("--volumes", default=None, callback=_parse_series, help="Volumes (obv).")
@click.option("--period", default=None, type=click.IntRange(min=1), help="Lookback period (default: from config).")
@click.option("--width", default=None, type=float, help="Bollinger width in deviations.")
@click.option("--short", "short_period", default=None, type=click.IntRange(min=1), help="MACD fast period.")
@click.option("--long", "long_period", default=None, type=click.IntRange(min=1), help="MACD slow period.")
@click.option("--signal", "signal_period", default=None, type=click.IntRange(min=1), help="MACD signal period.")
@click.option("--period-d", default=None, type=click.IntRange(min=1), help="Stochastic %D period.")
@click.option("--rows", default=10, show_default=True, help="Number of trailing values to show.")
def compute(
    indicator: str,
    closes: list[float],
    highs: Optional[list[float]],
    lows: Optional[list[float]],
    volumes: Optional[list[float]],
    period: Optional[int],
    width: Optional[float],
    short_period: Optional[int],
    signal_period: Optional[int],
    long_period: Optional[int],
    period_d: Optional[int],
    rows: int,
) -> None:
    """Compute one indicator and print its latest values."""
    import indicators  # lazy import

    cfg = _defaults()

    if indicator in _NEEDS_HIGH_LOW and (highs is None or lows is None):
        _error(f"{indicator} needs --highs and --lows.")
    if indicator == "obv" and volumes is None:
        _error("obv needs --volumes.")

    logger.debug("compute: %s over %d closes", indicator, len(closes))

    try:
        if indicator == "sma":
            columns = {"sma": indicators.sma_list(closes, _or_default(period, cfg, "bb_period", 20))}
        elif indicator == "ema":
            columns = {"ema": indicators.ema(closes, _or_default(period, cfg, "bb_period", 20))}
        elif indicator == "rsi":
            columns = {"rsi": indicators.rsi(closes, _or_default(period, cfg, "rsi_period", 14))}
        elif indicator == "atr":
            columns = {"atr": indicators.atr(highs, lows, closes, _or_default(period, cfg, "atr_period", 14))}
        elif indicator == "bollinger":
            bands = indicators.bollinger_bands(
                closes,
                _or_default(period, cfg, "bb_period", 20),
                _or_default(width, cfg, "bb_width", 2.0),
                str(cfg.get("bb_middle", "sma")),
            )
            columns = {"lower": bands.lower, "middle": bands.middle, "upper": bands.upper}
        elif indicator == "macd":
            result = indicators.macd(
                closes,
                _or_default(short_period, cfg, "macd_short", 12),
                _or_default(long_period, cfg, "macd_long", 26),
                _or_default(signal_period, cfg, "macd_signal", 9),
            )
            columns = {"line": result.line, "signal": result.signal, "histogram": result.histogram}
        elif indicator == "stochastic":
            result = indicators.stochastic(
                highs,
                lows,
                closes,
                _or_default(period, cfg, "stoch_period", 14),
                _or_default(period_d, cfg, "stoch_period_d", 3),
            )
            columns = {"%K": result.k, "%D": result.d}
        else:
            columns = {"obv": indicators.obv(closes, volumes)}
    except ValueError as exc:
        logger.exception("compute failed")
        _error(str(exc))

    if all(len(values) == 0 for values in columns.values()):
        console.print("[yellow]Not enough data for the requested period.[/yellow]")
        return

    console.print(_series_table(indicator.upper(), columns, rows))


# ---------------------------------------------------------------------------
# signals
# ---------------------------------------------------------------------------

@cli.command("signals")
@click.option("--closes", required=True, callback=_parse_series, help="Close prices.")
@click.option("--highs", required=True, callback=_parse_series, help="High prices.")
@click.option("--lows", required=True, callback=_parse_series, help="Low prices.")
@click.option("--volumes", required=True, callback=_parse_series, help="Volumes.")
def signals_cmd(
    closes: list[float],
    highs: list[float],
    lows: list[float],
    volumes: list[float],
) -> None:
    """Run every trend classifier over one price history."""
    from signals.engine import SignalEngine  # lazy import

    if not len(closes) == len(highs) == len(lows) == len(volumes):
        _error("closes, highs, lows and volumes must have the same length.")

    try:
        results = SignalEngine().evaluate_series(closes, highs, lows, volumes)
    except ValueError as exc:
        logger.exception("signals failed")
        _error(str(exc))

    if not results:
        console.print("[yellow]No signals generated.[/yellow]")
        return

    table = Table(title="Trend Signals", show_lines=True)
    table.add_column("Classifier", style="bold")
    table.add_column("Trend", justify="center")
    for name, trend in results.items():
        table.add_row(name, _trend_display(trend.value))

    console.print(table)


# ---------------------------------------------------------------------------
# Entry point for direct execution
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
