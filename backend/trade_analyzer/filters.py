"""Symbol and timeframe filters applied before lot matching."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

import pandas as pd

from .models import Trade


class Timeframe(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


_LOOKBACK = {
    Timeframe.WEEK: pd.DateOffset(days=7),
    Timeframe.MONTH: pd.DateOffset(months=1),
    Timeframe.QUARTER: pd.DateOffset(months=3),
}


def timeframe_cutoff(timeframe: Timeframe | str, now: datetime | None = None) -> Optional[datetime]:
    """Return the earliest activity date kept for ``timeframe``.

    ``None`` means no cutoff. Unknown timeframe names raise ``ValueError``.
    """

    timeframe = Timeframe(timeframe)
    if timeframe is Timeframe.ALL:
        return None
    reference = pd.Timestamp(now or datetime.now())
    if reference.tzinfo is not None:
        reference = reference.tz_convert(None)
    return (reference - _LOOKBACK[timeframe]).to_pydatetime()


def filter_trades(
    trades: Sequence[Trade],
    *,
    symbol: str = "",
    timeframe: Timeframe | str = Timeframe.ALL,
    now: datetime | None = None,
) -> List[Trade]:
    """Keep trades matching the symbol substring and the timeframe cutoff.

    Trades without a valid activity date never pass a timeframe cutoff.
    """

    needle = (symbol or "").lower()
    cutoff = timeframe_cutoff(timeframe, now)

    kept: List[Trade] = []
    for trade in trades:
        if needle and needle not in trade.symbol.lower():
            continue
        if cutoff is not None and (trade.activity_date is None or trade.activity_date < cutoff):
            continue
        kept.append(trade)
    return kept


__all__ = ["Timeframe", "filter_trades", "timeframe_cutoff"]
