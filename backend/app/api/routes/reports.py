"""Realized P/L report endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from app.core.telemetry import get_tracer
from app.schemas.reports import SummaryRequest, SummaryResponse
from trade_analyzer import build_summary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/summary", response_model=SummaryResponse)
async def create_summary(request: SummaryRequest) -> SummaryResponse:
    """Match the submitted trades FIFO and return the aggregated P/L report."""

    records = [trade.model_dump(by_alias=True) for trade in request.trades]
    with get_tracer().start_as_current_span("trade_analyzer.build_summary") as span:
        span.set_attribute("trades.input", len(records))
        span.set_attribute("filter.timeframe", request.timeframe.value)
        summary = build_summary(records, symbol=request.symbol, timeframe=request.timeframe)
        span.set_attribute("trades.closed", summary.trade_count)
        span.set_attribute("trades.unmatched_sells", len(summary.unmatched_sells))

    if summary.unmatched_sells:
        logger.info("Summary run left %d unmatched sells", len(summary.unmatched_sells))
    return SummaryResponse.model_validate(summary)


__all__ = ["create_summary"]
