"""Coerce raw brokerage records into :class:`Trade` values.

Raw records use the brokerage export column names (``"Activity Date"``,
``"CallPut"`` and so on). Malformed numbers fall back to ``0.0`` and
unparsable dates become ``None``; no record is ever rejected.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from .config import UNKNOWN_LABEL
from .models import CallPut, Trade, TransactionType

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER = "Account Number"
TYPE = "Type"
TRANSACTION = "Transaction"
QUANTITY = "Quantity"
SYMBOL = "Symbol"
CALL_PUT = "CallPut"
UNDERLYING_SYMBOL = "UnderlyingSymbol"
EXPIRE_DATE = "ExpireDate"
STRIKE_PRICE = "StrikePrice"
ACTIVITY_DATE = "Activity Date"
PRICE = "Price"
AMOUNT = "Amount"
COMMISSION = "Commission"

_TRANSACTIONS = {member.value.upper(): member for member in TransactionType}


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    return _text(value) or None


def _to_float(value: Any, *, field_name: str = "", default: Optional[float] = 0.0) -> Optional[float]:
    if value is None or isinstance(value, bool) or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug("Defaulting malformed %s value %r", field_name or "numeric", value)
        return default
    if math.isnan(number):
        return default
    return number


def _to_datetime(value: Any, *, field_name: str = "") -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        stamp = pd.Timestamp(value)
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        try:
            stamp = pd.to_datetime(value, errors="coerce")
        except (TypeError, ValueError):
            stamp = pd.NaT
    if pd.isna(stamp):
        logger.debug("Unparsable %s value %r", field_name or "date", value)
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert(None)
    return stamp.to_pydatetime()


def _transaction(value: Any) -> TransactionType:
    return _TRANSACTIONS.get(_text(value).upper(), TransactionType.UNKNOWN)


def _call_put(value: Any) -> Optional[CallPut]:
    text = _text(value).upper()
    if text == CallPut.CALL.value:
        return CallPut.CALL
    if text == CallPut.PUT.value:
        return CallPut.PUT
    return None


def normalize_trade(raw: Mapping[str, Any]) -> Trade:
    """Build a canonical :class:`Trade` from one raw record."""

    return Trade(
        symbol=_text(raw.get(SYMBOL)) or UNKNOWN_LABEL,
        transaction=_transaction(raw.get(TRANSACTION)),
        type=_text(raw.get(TYPE)) or UNKNOWN_LABEL,
        quantity=_to_float(raw.get(QUANTITY), field_name=QUANTITY),
        price=_to_float(raw.get(PRICE), field_name=PRICE),
        amount=_to_float(raw.get(AMOUNT), field_name=AMOUNT),
        commission=_to_float(raw.get(COMMISSION), field_name=COMMISSION),
        activity_date=_to_datetime(raw.get(ACTIVITY_DATE), field_name=ACTIVITY_DATE),
        call_put=_call_put(raw.get(CALL_PUT)),
        account_number=_optional_text(raw.get(ACCOUNT_NUMBER)),
        underlying_symbol=_optional_text(raw.get(UNDERLYING_SYMBOL)),
        expire_date=_to_datetime(raw.get(EXPIRE_DATE), field_name=EXPIRE_DATE),
        strike_price=_to_float(raw.get(STRIKE_PRICE), field_name=STRIKE_PRICE, default=None),
    )


def normalize_trades(records: Iterable[Mapping[str, Any]]) -> List[Trade]:
    """Normalize every record, keeping length and order."""

    return [normalize_trade(record) for record in records]


__all__ = ["normalize_trade", "normalize_trades"]
