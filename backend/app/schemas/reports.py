"""Schemas for the P/L report endpoint."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from trade_analyzer.filters import Timeframe
from trade_analyzer.models import CallPut

RawValue = Optional[Union[str, int, float, date, datetime]]


class RawTradeSchema(BaseModel):
    """One brokerage export row; column names are accepted verbatim."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    account_number: RawValue = Field(default=None, alias="Account Number")
    type: RawValue = Field(default=None, alias="Type")
    transaction: RawValue = Field(default=None, alias="Transaction")
    quantity: RawValue = Field(default=None, alias="Quantity")
    symbol: RawValue = Field(default=None, alias="Symbol")
    call_put: RawValue = Field(default=None, alias="CallPut")
    underlying_symbol: RawValue = Field(default=None, alias="UnderlyingSymbol")
    expire_date: RawValue = Field(default=None, alias="ExpireDate")
    strike_price: RawValue = Field(default=None, alias="StrikePrice")
    activity_date: RawValue = Field(default=None, alias="Activity Date")
    price: RawValue = Field(default=None, alias="Price")
    amount: RawValue = Field(default=None, alias="Amount")
    commission: RawValue = Field(default=None, alias="Commission")


class SummaryRequest(BaseModel):
    trades: list[RawTradeSchema] = Field(default_factory=list)
    symbol: str = Field(default="", description="Case-insensitive symbol substring filter")
    timeframe: Timeframe = Field(default=Timeframe.ALL)


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class SymbolStatSchema(_FromAttributes):
    symbol: str
    count: int
    pl: float


class TypePLSchema(_FromAttributes):
    type: str
    pl: float


class MonthPLSchema(_FromAttributes):
    month: str
    pl: float
    trade_count: int


class UnderlyingPLSchema(_FromAttributes):
    underlying: str
    pl: float
    count: int


class CallPutStatSchema(_FromAttributes):
    type: CallPut
    pl: float
    count: int
    win_rate: float


class DateRangeSchema(_FromAttributes):
    start: datetime | None = None
    end: datetime | None = None


class ClosedTradeSchema(_FromAttributes):
    symbol: str
    open_date: datetime | None = None
    close_date: datetime | None = None
    quantity: float
    open_price: float
    close_price: float
    pl: float
    type: str
    call_put: CallPut | None = None


class UnmatchedSellSchema(_FromAttributes):
    key: str
    symbol: str
    quantity: float
    activity_date: datetime | None = None
    call_put: CallPut | None = None


class SummaryResponse(_FromAttributes):
    total_pl: float
    win_rate: float
    trade_count: int
    avg_trade: float
    winning_trades: int
    losing_trades: int
    raw_trade_count: int
    filtered_trade_count: int
    date_range: DateRangeSchema
    top_symbols: list[SymbolStatSchema]
    pl_by_type: list[TypePLSchema]
    pl_by_month: list[MonthPLSchema]
    pl_by_underlying: list[UnderlyingPLSchema]
    call_put_performance: list[CallPutStatSchema]
    closed_trades: list[ClosedTradeSchema]
    unmatched_sells: list[UnmatchedSellSchema]


__all__ = [
    "ClosedTradeSchema",
    "RawTradeSchema",
    "SummaryRequest",
    "SummaryResponse",
    "UnmatchedSellSchema",
]
