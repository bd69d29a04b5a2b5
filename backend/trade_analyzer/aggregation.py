"""Aggregate closed trades into the reporting views."""
from __future__ import annotations

import re
from dataclasses import asdict, fields
from datetime import datetime
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, TypeVar

import pandas as pd

from .config import DEFAULT_TOP_SYMBOLS_LIMIT, UNKNOWN_LABEL
from .models import (
    CallPut,
    CallPutStat,
    ClosedTrade,
    DateRange,
    MonthPL,
    Summary,
    SymbolStat,
    Trade,
    TypePL,
    UnderlyingPL,
    UnmatchedSell,
)

_UNDERLYING_PATTERN = re.compile(r"^([A-Z]+)")
INVALID_MONTH = "Invalid Date"

K = TypeVar("K", bound=Hashable)


def _group_by(items: Sequence[ClosedTrade], key: Callable[[ClosedTrade], K]) -> Dict[K, List[ClosedTrade]]:
    grouped: Dict[K, List[ClosedTrade]] = {}
    for item in items:
        grouped.setdefault(key(item), []).append(item)
    return grouped


def _sum_pl(trades: Sequence[ClosedTrade]) -> float:
    return sum(trade.pl for trade in trades)


def _win_rate(trades: Sequence[ClosedTrade]) -> float:
    if not trades:
        return 0.0
    winners = sum(1 for trade in trades if trade.pl > 0)
    return winners / len(trades) * 100


def month_key(value: Optional[datetime]) -> str:
    if value is None:
        return INVALID_MONTH
    return f"{value.year}-{value.month:02d}"


def extract_underlying(symbol: str) -> str:
    """Return the leading upper-case letter run of an option symbol."""

    match = _UNDERLYING_PATTERN.match(symbol)
    return match.group(1) if match else UNKNOWN_LABEL


def top_symbols(closed_trades: Sequence[ClosedTrade], limit: int = DEFAULT_TOP_SYMBOLS_LIMIT) -> List[SymbolStat]:
    stats = [
        SymbolStat(symbol=symbol, count=len(trades), pl=_sum_pl(trades))
        for symbol, trades in _group_by(closed_trades, lambda t: t.symbol).items()
    ]
    stats.sort(key=lambda stat: -stat.count)
    return stats[:limit]


def pl_by_type(closed_trades: Sequence[ClosedTrade]) -> List[TypePL]:
    return [
        TypePL(type=trade_type, pl=_sum_pl(trades))
        for trade_type, trades in _group_by(closed_trades, lambda t: t.type).items()
    ]


def pl_by_month(closed_trades: Sequence[ClosedTrade]) -> List[MonthPL]:
    rows = [
        MonthPL(month=month, pl=_sum_pl(trades), trade_count=len(trades))
        for month, trades in _group_by(closed_trades, lambda t: month_key(t.close_date)).items()
    ]
    rows.sort(key=lambda row: row.month)
    return rows


def _option_trades(closed_trades: Sequence[ClosedTrade]) -> List[ClosedTrade]:
    return [trade for trade in closed_trades if trade.call_put in (CallPut.CALL, CallPut.PUT)]


def pl_by_underlying(closed_trades: Sequence[ClosedTrade]) -> List[UnderlyingPL]:
    grouped = _group_by(_option_trades(closed_trades), lambda t: extract_underlying(t.symbol))
    rows = [
        UnderlyingPL(underlying=underlying, pl=_sum_pl(trades), count=len(trades))
        for underlying, trades in grouped.items()
    ]
    rows.sort(key=lambda row: -row.pl)
    return rows


def call_put_performance(closed_trades: Sequence[ClosedTrade]) -> List[CallPutStat]:
    return [
        CallPutStat(type=call_put, pl=_sum_pl(trades), count=len(trades), win_rate=_win_rate(trades))
        for call_put, trades in _group_by(_option_trades(closed_trades), lambda t: t.call_put).items()
    ]


def date_range(sorted_trades: Sequence[Trade]) -> DateRange:
    """Return the first and last activity dates of an already sorted list."""

    if not sorted_trades:
        return DateRange()
    return DateRange(start=sorted_trades[0].activity_date, end=sorted_trades[-1].activity_date)


def aggregate(
    closed_trades: Sequence[ClosedTrade],
    sorted_trades: Sequence[Trade] = (),
    *,
    filtered_trade_count: Optional[int] = None,
    unmatched_sells: Sequence[UnmatchedSell] = (),
    top_symbols_limit: int = DEFAULT_TOP_SYMBOLS_LIMIT,
    fallback_pl_by_type: Sequence[TypePL] = (),
) -> Summary:
    """Compute every summary view from the closed trades.

    ``sorted_trades`` is the date-sorted input population; it only feeds the
    date range and the raw trade count.
    """

    total_pl = _sum_pl(closed_trades)
    trade_count = len(closed_trades)
    winning = sum(1 for trade in closed_trades if trade.pl > 0)
    by_type = pl_by_type(closed_trades) or list(fallback_pl_by_type)

    return Summary(
        total_pl=total_pl,
        win_rate=_win_rate(closed_trades),
        trade_count=trade_count,
        avg_trade=total_pl / trade_count if trade_count > 0 else 0.0,
        winning_trades=winning,
        losing_trades=trade_count - winning,
        raw_trade_count=len(sorted_trades),
        filtered_trade_count=len(sorted_trades) if filtered_trade_count is None else filtered_trade_count,
        date_range=date_range(sorted_trades),
        top_symbols=top_symbols(closed_trades, top_symbols_limit),
        pl_by_type=by_type,
        pl_by_month=pl_by_month(closed_trades),
        pl_by_underlying=pl_by_underlying(closed_trades),
        call_put_performance=call_put_performance(closed_trades),
        closed_trades=list(closed_trades),
        unmatched_sells=list(unmatched_sells),
    )


CLOSED_TRADE_COLUMNS = [f.name for f in fields(ClosedTrade)]


def closed_trades_frame(closed_trades: Sequence[ClosedTrade]) -> pd.DataFrame:
    """Tabulate closed trades, one row per match, in match order."""

    records: List[Dict[str, Any]] = [
        {**asdict(trade), "call_put": trade.call_put.value if trade.call_put else None}
        for trade in closed_trades
    ]
    return pd.DataFrame.from_records(records, columns=CLOSED_TRADE_COLUMNS)


__all__ = [
    "CLOSED_TRADE_COLUMNS",
    "INVALID_MONTH",
    "aggregate",
    "call_put_performance",
    "closed_trades_frame",
    "date_range",
    "extract_underlying",
    "month_key",
    "pl_by_month",
    "pl_by_type",
    "pl_by_underlying",
    "top_symbols",
]
