"""Liveness and readiness endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from soundshare.core.config import settings
from soundshare.core.database import check_db_connected, get_db
from soundshare.schemas.health import ReadinessResponse

router = APIRouter()


@router.get("", response_class=PlainTextResponse)
def get_health() -> str:
    """Liveness: plain-text OK, no dependencies touched."""
    return "OK"


@router.get("/ready", response_model=ReadinessResponse)
def get_ready(db: Annotated[Session, Depends(get_db)]) -> ReadinessResponse:
    """Readiness: service status plus database connectivity."""
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return ReadinessResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
    )
