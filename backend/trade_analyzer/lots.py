"""FIFO lot matching of sells against earlier buys."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, Dict, Iterable, List, Tuple

from .config import STOCK_OPTION_CLASS
from .models import ClosedTrade, Trade, TransactionType, UnmatchedSell

logger = logging.getLogger(__name__)


@dataclass
class _OpenLot:
    """Internal representation of an open buy lot."""

    trade: Trade
    remaining_quantity: float

    @property
    def original_quantity(self) -> float:
        return self.trade.quantity


@dataclass
class MatchResult:
    closed_trades: List[ClosedTrade] = field(default_factory=list)
    unmatched: List[UnmatchedSell] = field(default_factory=list)


def lot_key(trade: Trade, stock_option_class: str = STOCK_OPTION_CLASS) -> str:
    """Return the queue key ``<symbol>-<CALL|PUT|stock>`` for ``trade``."""

    option_class = trade.call_put.value if trade.call_put else stock_option_class
    return f"{trade.symbol}-{option_class}"


def _date_sort_key(trade: Trade) -> Tuple[bool, datetime]:
    # Trades with an invalid date sort after every dated trade.
    return (trade.activity_date is None, trade.activity_date or datetime.min)


def sort_by_activity_date(trades: Iterable[Trade]) -> List[Trade]:
    """Stable sort by activity date, ascending."""

    return sorted(trades, key=_date_sort_key)


def _close(lot: _OpenLot, sell: Trade, qty: float, open_amount: float) -> ClosedTrade:
    close_amount = sell.price * qty - sell.commission * (qty / sell.quantity)
    return ClosedTrade(
        symbol=sell.symbol,
        open_date=lot.trade.activity_date,
        close_date=sell.activity_date,
        quantity=qty,
        open_price=lot.trade.price,
        close_price=sell.price,
        pl=close_amount - open_amount,
        type=sell.type,
        call_put=sell.call_put,
    )


def match_trades(
    trades: Iterable[Trade],
    *,
    stock_option_class: str = STOCK_OPTION_CLASS,
) -> MatchResult:
    """Match sells against queued buys per symbol and option class.

    A fully consumed lot is charged its whole commission; a partially
    consumed lot is charged commission in proportion to its original
    quantity. Sell commission is always prorated over the sell quantity.
    Sell quantity with no lot left to match is reported in
    ``MatchResult.unmatched`` and produces no closed trade.
    """

    queues: Dict[str, Deque[_OpenLot]] = {}
    result = MatchResult()

    for trade in sort_by_activity_date(trades):
        key = lot_key(trade, stock_option_class)
        lots = queues.setdefault(key, deque())

        if trade.transaction is TransactionType.BUY:
            lots.append(_OpenLot(trade=trade, remaining_quantity=trade.quantity))
        elif trade.transaction is TransactionType.SELL:
            remaining = trade.quantity
            while remaining > 0 and lots:
                lot = lots[0]
                if lot.remaining_quantity <= remaining:
                    qty = lot.remaining_quantity
                    open_amount = lot.trade.price * qty + lot.trade.commission
                    result.closed_trades.append(_close(lot, trade, qty, open_amount))
                    remaining -= qty
                    lots.popleft()
                else:
                    qty = remaining
                    open_amount = lot.trade.price * qty + lot.trade.commission * (
                        qty / lot.original_quantity
                    )
                    result.closed_trades.append(_close(lot, trade, qty, open_amount))
                    lot.remaining_quantity -= qty
                    remaining = 0

            if remaining > 0:
                logger.warning("Unmatched sell for %s, qty: %s", key, remaining)
                result.unmatched.append(
                    UnmatchedSell(
                        key=key,
                        symbol=trade.symbol,
                        quantity=remaining,
                        activity_date=trade.activity_date,
                        call_put=trade.call_put,
                    )
                )
        # Other transaction types neither open nor close lots

    return result


__all__ = ["MatchResult", "lot_key", "match_trades", "sort_by_activity_date"]
