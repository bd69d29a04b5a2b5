from datetime import datetime

import pytest

from conftest import raw_trade
from trade_analyzer import Timeframe, build_summary
from trade_analyzer.config import AnalyzerSettings
from trade_analyzer.models import CallPut, TypePL


def _rows():
    return [
        raw_trade("AAPL", "Buy", 10, 100, "2024-06-01", commission=1),
        raw_trade("AAPL", "Sell", 10, 110, "2024-06-02", commission=1),
    ]


def test_end_to_end_round_trip():
    summary = build_summary(_rows())
    assert len(summary.closed_trades) == 1
    assert summary.closed_trades[0].pl == pytest.approx(98.0)
    assert summary.total_pl == pytest.approx(98.0)
    assert summary.win_rate == 100.0
    assert summary.trade_count == 1
    assert summary.avg_trade == pytest.approx(98.0)
    assert summary.raw_trade_count == 2
    assert summary.date_range.start == datetime(2024, 6, 1)
    assert summary.date_range.end == datetime(2024, 6, 2)


def test_empty_input_is_a_normal_state():
    summary = build_summary([])
    assert summary.trade_count == 0
    assert summary.total_pl == 0
    assert summary.closed_trades == []
    assert summary.date_range.start is None


def test_timeframe_filter_changes_the_matching_population(now):
    rows = [
        raw_trade("MSFT", "Buy", 5, 300, "2024-01-02"),
        raw_trade("MSFT", "Sell", 5, 320, "2024-06-28"),
    ]

    everything = build_summary(rows, now=now)
    assert everything.trade_count == 1
    assert everything.unmatched_sells == []

    last_week = build_summary(rows, timeframe=Timeframe.WEEK, now=now)
    assert last_week.trade_count == 0
    assert last_week.filtered_trade_count == 1
    assert [sell.quantity for sell in last_week.unmatched_sells] == [5]
    # Date range still spans the unfiltered input
    assert last_week.date_range.start == datetime(2024, 1, 2)
    assert last_week.raw_trade_count == 2


def test_symbol_filter_restricts_matching():
    rows = _rows() + [
        raw_trade("TSLA", "Buy", 1, 200, "2024-06-01"),
        raw_trade("TSLA", "Sell", 1, 150, "2024-06-03"),
    ]
    summary = build_summary(rows, symbol="tsla")
    assert [trade.symbol for trade in summary.closed_trades] == ["TSLA"]
    assert summary.total_pl == pytest.approx(-50.0)


def test_options_views():
    rows = [
        raw_trade("AAPL230101C150", "Buy", 1, 2.0, "2022-12-01", call_put="CALL", security_type="Option"),
        raw_trade("AAPL230101C150", "Sell", 1, 3.0, "2022-12-10", call_put="CALL", security_type="Option"),
        raw_trade("AAPL230101P140", "Buy", 2, 1.0, "2022-12-01", call_put="PUT", security_type="Option"),
        raw_trade("AAPL230101P140", "Sell", 2, 0.5, "2022-12-12", call_put="PUT", security_type="Option"),
    ]
    summary = build_summary(rows)
    assert [(row.underlying, row.count) for row in summary.pl_by_underlying] == [("AAPL", 2)]
    assert summary.pl_by_underlying[0].pl == pytest.approx(0.0)
    performance = {row.type: row for row in summary.call_put_performance}
    assert performance[CallPut.CALL].win_rate == 100.0
    assert performance[CallPut.PUT].win_rate == 0.0
    assert [row.month for row in summary.pl_by_month] == ["2022-12"]


def test_settings_drive_fallback_and_top_symbols():
    settings = AnalyzerSettings(
        top_symbols_limit=1,
        fallback_pl_by_type=[{"type": "Stock", "pl": 0.0}],
    )
    assert build_summary([], settings=settings).pl_by_type == [TypePL(type="Stock", pl=0.0)]

    rows = _rows() + [
        raw_trade("TSLA", "Buy", 1, 200, "2024-06-01"),
        raw_trade("TSLA", "Sell", 1, 150, "2024-06-03"),
    ]
    assert len(build_summary(rows, settings=settings).top_symbols) == 1


def test_pipeline_reruns_are_identical():
    rows = _rows()
    assert build_summary(rows) == build_summary(rows)
