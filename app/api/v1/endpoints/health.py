"""Health check API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.core.config import settings
from app.database.session import get_store
from app.database.store import RowStore
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Health check status")
    version: str = Field(..., description="Running application version")
    service: str = Field(..., description="Service name")
    store: str = Field(..., description="Row store status")


@router.get(
    "/",
    response_model=HealthCheckResponse,
    tags=["Health"],
    summary="Health check endpoint",
    description="Check if the service is running and its row store is reachable",
    operation_id="get_service_health_status",
)
async def health_check(store: Annotated[RowStore, Depends(get_store)]) -> HealthCheckResponse:
    """Health check endpoint."""
    store_health = await store.health_check()

    return HealthCheckResponse(
        status="healthy" if store_health["status"] == "healthy" else "degraded",
        version=settings.app_version,
        service=settings.app_name,
        store=store_health["status"],
    )
