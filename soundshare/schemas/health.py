"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class ReadinessResponse(BaseModel):
    """Response body for the readiness check."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Database connectivity status",
    )
