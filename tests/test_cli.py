"""Tests for the indic click CLI."""

from __future__ import annotations

import pandas as pd
from click.testing import CliRunner

from app.cli import cli


def _csv(values) -> str:
    return ",".join(f"{v:.6f}" for v in values)


class TestCompute:
    def test_sma(self) -> None:
        result = CliRunner().invoke(cli, ["compute", "sma", "--closes", "1,2,3,4,5", "--period", "3"])
        assert result.exit_code == 0, result.output
        assert "4.0000" in result.output
        assert "last" in result.output

    def test_macd_columns(self) -> None:
        result = CliRunner().invoke(
            cli,
            ["compute", "macd", "--closes", "1,2,3,4,5,6",
             "--short", "2", "--long", "3", "--signal", "2"],
        )
        assert result.exit_code == 0, result.output
        assert "histogram" in result.output
        assert "-2.1875" in result.output

    def test_stochastic_needs_highs_and_lows(self) -> None:
        result = CliRunner().invoke(cli, ["compute", "stochastic", "--closes", "1,2,3"])
        assert result.exit_code == 1
        assert "needs --highs and --lows" in result.output

    def test_obv_needs_volumes(self) -> None:
        result = CliRunner().invoke(cli, ["compute", "obv", "--closes", "1,2,3"])
        assert result.exit_code == 1

    def test_not_enough_data(self) -> None:
        result = CliRunner().invoke(cli, ["compute", "rsi", "--closes", "1,2", "--period", "5"])
        assert result.exit_code == 0
        assert "Not enough data" in result.output

    def test_explicit_period_overrides_config(self) -> None:
        result = CliRunner().invoke(cli, ["compute", "sma", "--closes", "1,2,3", "--period", "1"])
        assert result.exit_code == 0, result.output
        assert "3.0000" in result.output

    def test_zero_period_is_rejected(self) -> None:
        result = CliRunner().invoke(cli, ["compute", "rsi", "--closes", "1,2,3", "--period", "0"])
        assert result.exit_code == 2
        assert "--period" in result.output

    def test_invalid_series(self) -> None:
        result = CliRunner().invoke(cli, ["compute", "sma", "--closes", "1,abc"])
        assert result.exit_code == 2
        assert "comma-separated numbers" in result.output

    def test_unknown_indicator(self) -> None:
        result = CliRunner().invoke(cli, ["compute", "vwap", "--closes", "1,2"])
        assert result.exit_code == 2


class TestSignals:
    def test_signals_table(self, sample_ohlcv_df: pd.DataFrame) -> None:
        df = sample_ohlcv_df
        result = CliRunner().invoke(
            cli,
            ["signals",
             "--closes", _csv(df["close"]),
             "--highs", _csv(df["high"]),
             "--lows", _csv(df["low"]),
             "--volumes", _csv(df["volume"])],
        )
        assert result.exit_code == 0, result.output
        assert "stochastic" in result.output
        assert "obv_ema" in result.output

    def test_mismatched_lengths(self) -> None:
        result = CliRunner().invoke(
            cli,
            ["signals", "--closes", "1,2,3", "--highs", "2,3", "--lows", "0,1,2", "--volumes", "5,5,5"],
        )
        assert result.exit_code == 1
        assert "same length" in result.output
