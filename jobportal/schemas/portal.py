"""Portal schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PortalCreate(BaseModel):
    """Create a new portal."""

    category: str | None = None
    link: str | None = None


class PortalUpdate(BaseModel):
    """Update a portal. Only supplied fields change."""

    category: str | None = None
    link: str | None = None


class PortalResponse(BaseModel):
    """Portal response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    category: str
    link: str
    user_id: int
    created_at: datetime
    updated_at: datetime | None


class PortalCreated(BaseModel):
    message: str
    portal_id: int


class MessageResponse(BaseModel):
    message: str
