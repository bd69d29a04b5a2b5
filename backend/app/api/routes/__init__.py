"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .reports import router as reports_router

api_router = APIRouter()
api_router.include_router(reports_router, prefix="/reports", tags=["reports"])

__all__ = ["api_router"]
