"""Health check endpoint with database and template availability checks."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.deps import get_template_store
from app.core.config import APP_VERSION, settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse
from app.services.templates import TemplateStore

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    templates: Annotated[TemplateStore, Depends(get_template_store)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        version=APP_VERSION,
        environment=settings.APP_ENV,
        database=db_status,
        template_available=templates.is_available(),
    )
