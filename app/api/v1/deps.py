"""Dependencies that build per-request store objects around the request's DB session."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.services.catalog import ServiceCatalogStore
from app.services.forms import FormStructureStore
from app.services.proposals import ProposalStore
from app.services.templates import TemplateStore
from app.services.users import UserStore


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_form_store(db: Annotated[Session, Depends(get_db)]) -> FormStructureStore:
    return FormStructureStore(db)


def get_catalog_store(db: Annotated[Session, Depends(get_db)]) -> ServiceCatalogStore:
    return ServiceCatalogStore(db)


def get_proposal_store(db: Annotated[Session, Depends(get_db)]) -> ProposalStore:
    return ProposalStore(db)


def get_template_store() -> TemplateStore:
    return TemplateStore(settings.TEMPLATES_DIR, settings.MAX_TEMPLATE_BYTES)
