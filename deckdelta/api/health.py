"""
Health check endpoint.

The service has no external dependencies, so liveness is all there is.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from deckdelta.parsers.deck_list import parse

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    parser: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running and the parser reads a
    one-line list.
    """
    parsed = parse("1 Sol Ring")
    parser_status = "ok" if len(parsed.mainboard) == 1 else "degraded"
    return HealthResponse(status="healthy", parser=parser_status)
