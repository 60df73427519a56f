"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.form_structure import FormStructureVersion
from app.models.proposal import Proposal
from app.models.service import Service
from app.models.user import User

__all__ = ["Base", "FormStructureVersion", "Proposal", "Service", "User"]
