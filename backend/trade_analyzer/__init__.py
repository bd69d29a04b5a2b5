"""Core package for the trade P/L analyzer."""

from .aggregation import aggregate, closed_trades_frame
from .filters import Timeframe, filter_trades
from .lots import MatchResult, match_trades
from .models import ClosedTrade, Summary, Trade, UnmatchedSell
from .normalizer import normalize_trades
from .pipeline import build_summary

__all__ = [
    "ClosedTrade",
    "MatchResult",
    "Summary",
    "Timeframe",
    "Trade",
    "UnmatchedSell",
    "aggregate",
    "build_summary",
    "closed_trades_frame",
    "filter_trades",
    "match_trades",
    "normalize_trades",
]
