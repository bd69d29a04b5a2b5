"""Pipeline function building a P/L summary from raw trade records."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Mapping

from .aggregation import aggregate
from .config import AnalyzerSettings, get_settings
from .filters import Timeframe, filter_trades
from .lots import match_trades, sort_by_activity_date
from .models import Summary, TypePL
from .normalizer import normalize_trades

logger = logging.getLogger(__name__)


def build_summary(
    records: Iterable[Mapping[str, Any]],
    *,
    symbol: str = "",
    timeframe: Timeframe | str = Timeframe.ALL,
    now: datetime | None = None,
    settings: AnalyzerSettings | None = None,
) -> Summary:
    """Normalize, filter, match and aggregate ``records`` into a :class:`Summary`.

    Every call builds its own lot queues, so filters change the matching
    population: a buy dropped by the timeframe cannot close a later sell.
    """

    settings = settings or get_settings()

    trades = normalize_trades(records)
    filtered = filter_trades(trades, symbol=symbol, timeframe=timeframe, now=now)
    matched = match_trades(filtered, stock_option_class=settings.stock_option_class)

    logger.debug(
        "Built summary from %d trades (%d after filters): %d closed, %d unmatched",
        len(trades),
        len(filtered),
        len(matched.closed_trades),
        len(matched.unmatched),
    )

    return aggregate(
        matched.closed_trades,
        sort_by_activity_date(trades),
        filtered_trade_count=len(filtered),
        unmatched_sells=matched.unmatched,
        top_symbols_limit=settings.top_symbols_limit,
        fallback_pl_by_type=[TypePL(**row) for row in settings.fallback_pl_by_type],
    )


__all__ = ["build_summary"]
