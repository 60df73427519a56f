"""Schemas for proposal submissions."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class ProposalCreated(BaseModel):
    id: int


class ProposalItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    data: dict[str, Any]
    created_at: datetime | None = None
