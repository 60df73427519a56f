"""Schemas for the dynamic form structure: sections of typed fields with optional constraints."""

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

DEFAULT_FORM_STRUCTURE: list[dict[str, Any]] = [
    {"title": "Basic Information", "fields": []},
]


class FormField(BaseModel):
    """
    One input on the form.

    Unknown keys are kept so the frontend can add type-specific options
    without a backend change; minLength, maxLength and pattern are checked.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | int
    type: str = Field(..., min_length=1)
    label: str
    required: StrictBool
    min_length: int | None = Field(default=None, alias="minLength", ge=0)
    max_length: int | None = Field(default=None, alias="maxLength", ge=0)
    pattern: str | None = None

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str | None) -> str | None:
        if v is None:
            return None
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"pattern is not a valid regular expression: {e}") from e
        return v

    @model_validator(mode="after")
    def validate_length_bounds(self) -> "FormField":
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError("minLength must not exceed maxLength")
        return self


class FormSection(BaseModel):
    """A titled group of fields."""

    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    title: str
    fields: list[FormField] = Field(..., min_length=0)


class FormStructureSaveRequest(BaseModel):
    """Body of POST /form-structure. Shape of structure is checked by the store."""

    structure: Any


class FormStructureResponse(BaseModel):
    structure: list[dict[str, Any]]


class FormStructureVersionItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    structure: list[dict[str, Any]]
    created_at: datetime | None = None
