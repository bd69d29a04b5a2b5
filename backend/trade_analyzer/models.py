"""Domain models used by the trade analyzer pipeline."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional


class TransactionType(str, Enum):
    BUY = "Buy"
    SELL = "Sell"
    UNKNOWN = "Unknown"


class CallPut(str, Enum):
    CALL = "CALL"
    PUT = "PUT"


@dataclass(frozen=True)
class Trade:
    """A normalized brokerage trade record.

    ``activity_date`` is ``None`` when the source date could not be parsed.
    """

    symbol: str
    transaction: TransactionType
    type: str
    quantity: float
    price: float = 0.0
    amount: float = 0.0
    commission: float = 0.0
    activity_date: Optional[datetime] = None
    call_put: Optional[CallPut] = None
    account_number: Optional[str] = None
    underlying_symbol: Optional[str] = None
    expire_date: Optional[datetime] = None
    strike_price: Optional[float] = None


@dataclass(frozen=True)
class ClosedTrade:
    """A realized match between one opening and one closing trade."""

    symbol: str
    open_date: Optional[datetime]
    close_date: Optional[datetime]
    quantity: float
    open_price: float
    close_price: float
    pl: float
    type: str
    call_put: Optional[CallPut] = None


@dataclass(frozen=True)
class UnmatchedSell:
    """Sell quantity left over after every open lot for its key was consumed."""

    key: str
    symbol: str
    quantity: float
    activity_date: Optional[datetime] = None
    call_put: Optional[CallPut] = None


@dataclass(frozen=True)
class SymbolStat:
    symbol: str
    count: int
    pl: float


@dataclass(frozen=True)
class TypePL:
    type: str
    pl: float


@dataclass(frozen=True)
class MonthPL:
    month: str
    pl: float
    trade_count: int


@dataclass(frozen=True)
class UnderlyingPL:
    underlying: str
    pl: float
    count: int


@dataclass(frozen=True)
class CallPutStat:
    type: CallPut
    pl: float
    count: int
    win_rate: float


@dataclass(frozen=True)
class DateRange:
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class Summary:
    """Report object produced by one pipeline run."""

    total_pl: float = 0.0
    win_rate: float = 0.0
    trade_count: int = 0
    avg_trade: float = 0.0
    winning_trades: int = 0
    losing_trades: int = 0
    raw_trade_count: int = 0
    filtered_trade_count: int = 0
    date_range: DateRange = field(default_factory=DateRange)
    top_symbols: List[SymbolStat] = field(default_factory=list)
    pl_by_type: List[TypePL] = field(default_factory=list)
    pl_by_month: List[MonthPL] = field(default_factory=list)
    pl_by_underlying: List[UnderlyingPL] = field(default_factory=list)
    call_put_performance: List[CallPutStat] = field(default_factory=list)
    closed_trades: List[ClosedTrade] = field(default_factory=list)
    unmatched_sells: List[UnmatchedSell] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the summary as nested plain values."""

        return asdict(self)
