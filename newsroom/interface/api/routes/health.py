"""Liveness endpoint."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from newsroom.config import Settings
from newsroom.util.observability import SERVICE_VERSION

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    environment: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is up. Does not touch the database."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version=SERVICE_VERSION,
        environment=settings.environment,
    )
