"""Daily inspirational quote from an upstream API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from mindhaven.core.config import settings
from mindhaven.schemas.quote import QuoteResponse

logger = logging.getLogger(__name__)

FALLBACK_QUOTE = QuoteResponse(
    content="Believe you can and you're halfway there.",
    author="Theodore Roosevelt",
    tags=["inspirational", "motivation"],
    fallback=True,
)


class QuoteServiceError(Exception):
    """Raised when the upstream quote API cannot be used."""


def _fetch_upstream() -> dict[str, Any]:
    try:
        response = httpx.get(settings.quote_api_url, timeout=settings.quote_timeout_seconds)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise QuoteServiceError(f"Quote request failed: {exc}") from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise QuoteServiceError("Quote response is not JSON") from exc
    # Some providers wrap the quote in a single-element list.
    if isinstance(data, list) and data:
        data = data[0]
    if not isinstance(data, dict) or not data.get("content"):
        raise QuoteServiceError("Quote response missing 'content' field")
    return data


def get_daily_quote() -> QuoteResponse:
    """Upstream quote, or a fixed fallback when the upstream is unreachable."""
    try:
        data = _fetch_upstream()
    except QuoteServiceError as exc:
        logger.warning("Using fallback quote: %s", exc)
        return FALLBACK_QUOTE
    return QuoteResponse(
        content=data["content"],
        author=data.get("author") or "Unknown",
        tags=list(data.get("tags") or []),
    )
