import asyncio
import inspect
import pathlib
import sys
from datetime import datetime
from typing import Any

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the suite."""

    config.addinivalue_line("markers", "asyncio: mark test as running in an asyncio event loop")


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    test_function = pyfuncitem.obj
    if inspect.iscoroutinefunction(test_function):
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            loop.run_until_complete(test_function(**pyfuncitem.funcargs))
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        return True
    return None


def raw_trade(
    symbol: str,
    transaction: str,
    quantity: Any,
    price: Any,
    activity_date: Any,
    *,
    commission: Any = 0,
    call_put: str | None = None,
    security_type: str = "Stock",
    amount: Any = 0,
) -> dict[str, Any]:
    """Build a raw brokerage row using the export's column names."""

    return {
        "Account Number": "X1234",
        "Type": security_type,
        "Transaction": transaction,
        "Quantity": quantity,
        "Symbol": symbol,
        "CallPut": call_put,
        "UnderlyingSymbol": None,
        "ExpireDate": None,
        "StrikePrice": None,
        "Activity Date": activity_date,
        "Price": price,
        "Amount": amount,
        "Commission": commission,
    }


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 30, 12, 0)
