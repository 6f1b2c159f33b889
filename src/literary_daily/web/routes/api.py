# ABOUTME: JSON API routes for the daily content cards.
# ABOUTME: Endpoints for content fetch, scheduled generation, and health check.

from datetime import date

import structlog
from fastapi import APIRouter
from pydantic import BaseModel

from literary_daily import __version__
from literary_daily.models import DailyPair
from literary_daily.web.dependencies import DailyContentSvc

router = APIRouter(prefix="/api", tags=["api"])
log = structlog.get_logger()


class GenerateResponse(BaseModel):
    """Response model for the generation trigger."""

    message: str
    date: date


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    version: str = __version__


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for load balancer."""
    return HealthResponse(status="healthy")


@router.get("/daily-content", response_model=DailyPair, response_model_exclude_none=True)
async def daily_content(service: DailyContentSvc):
    """Today's and yesterday's cards, generating today's on first request."""
    return await service.get_daily_pair()


@router.get("/generate-daily-content", response_model=GenerateResponse)
async def generate_daily_content(service: DailyContentSvc):
    """Ensure today's content exists (for a scheduler hitting this once a day)."""
    result = await service.ensure_today()
    if result.created:
        log.info("api_generate_complete", date=result.date.isoformat())
        return GenerateResponse(message="Today's content generated.", date=result.date)
    return GenerateResponse(message="Today's content already exists.", date=result.date)
