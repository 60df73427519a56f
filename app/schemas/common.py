"""Schemas shared across endpoints."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
