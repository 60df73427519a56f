"""Schemas for the service catalog."""

from pydantic import BaseModel, ConfigDict, Field


class ServiceItem(BaseModel):
    """Catalog entry as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    title: str | None = None
    display_order: int | None = None


class ServiceUpsert(BaseModel):
    """One entry of a bulk replace; without id (or with an unknown id) it is inserted."""

    id: int | None = Field(default=None, ge=1)
    name: str = Field(..., min_length=1, max_length=255)
    title: str | None = Field(default=None, max_length=255, description="URL-safe slug")
    display_order: int | None = None
