"""Form structure store: every save appends a version; the newest version is the live form."""

import copy
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from app.core.errors import InvalidStructure
from app.models import FormStructureVersion
from app.schemas.forms import DEFAULT_FORM_STRUCTURE, FormSection

logger = logging.getLogger(__name__)

_SECTIONS_ADAPTER = TypeAdapter(list[FormSection])


def _describe_first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    location = ".".join(str(part) for part in err.get("loc", ()))
    if location:
        return f"Invalid form structure at {location}: {err.get('msg')}"
    return f"Invalid form structure: {err.get('msg')}"


def validate_structure(structure: Any) -> list[dict[str, Any]]:
    """Check that structure is a non-empty array of sections; return it unchanged."""
    if not isinstance(structure, list):
        raise InvalidStructure()
    if not structure:
        raise InvalidStructure("Form structure must contain at least one section")
    try:
        _SECTIONS_ADAPTER.validate_python(structure)
    except ValidationError as e:
        raise InvalidStructure(_describe_first_error(e)) from e
    return structure


class FormStructureStore:
    """Append-only persistence of form layouts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _latest_query(self):
        return self.session.query(FormStructureVersion).order_by(
            FormStructureVersion.created_at.desc(),
            FormStructureVersion.id.desc(),
        )

    def get_current(self) -> list[dict[str, Any]]:
        """Structure of the most recently saved version, or the single-section default."""
        latest = self._latest_query().first()
        if latest is None:
            return copy.deepcopy(DEFAULT_FORM_STRUCTURE)
        return latest.structure

    def save(self, structure: Any) -> FormStructureVersion:
        """Validate and append a new version. Earlier versions are never touched."""
        validate_structure(structure)
        version = FormStructureVersion(structure=structure)
        self.session.add(version)
        self.session.commit()
        self.session.refresh(version)
        logger.info(
            "Saved form structure version id=%s sections=%s",
            version.id,
            len(structure),
        )
        return version

    def history(self, limit: int = 50) -> list[FormStructureVersion]:
        """Saved versions, newest first."""
        return self._latest_query().limit(limit).all()
