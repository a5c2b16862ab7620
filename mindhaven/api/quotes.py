"""Daily quote endpoint."""

from fastapi import APIRouter

from mindhaven.schemas.quote import QuoteResponse
from mindhaven.services.quote_service import get_daily_quote

router = APIRouter(tags=["quotes"])


@router.get("/daily-quote", response_model=QuoteResponse)
def daily_quote():
    """Inspirational quote; a fixed fallback when the upstream is down."""
    return get_daily_quote()
