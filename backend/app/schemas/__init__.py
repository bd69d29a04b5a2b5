"""Pydantic schema exports."""

from .reports import (
    ClosedTradeSchema,
    RawTradeSchema,
    SummaryRequest,
    SummaryResponse,
    UnmatchedSellSchema,
)

__all__ = [
    "ClosedTradeSchema",
    "RawTradeSchema",
    "SummaryRequest",
    "SummaryResponse",
    "UnmatchedSellSchema",
]
