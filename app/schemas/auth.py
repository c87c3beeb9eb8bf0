"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class CurrentUser(BaseModel):
    """Acting user resolved from the bearer token (or the system actor when auth is off)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    contact_number: str | None = None
    full_name: str | None = None
    is_system: bool = False


class AccessProfileResponse(BaseModel):
    """Response for GET /auth/me: active role names and granted permission names."""

    user_id: int
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
