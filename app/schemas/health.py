"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus storage reachability and the size of the lookup registry."""

    status: Literal["ok", "degraded"] = Field(
        default="ok", description="'degraded' when the database is unreachable"
    )
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"]
    database_dialect: str = Field(description="SQLAlchemy dialect name, e.g. postgresql or sqlite")
    meta_tables: int = Field(ge=0, description="Number of registered lookup tables")
