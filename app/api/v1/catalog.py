"""Service catalog endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.auth import get_current_user, require_admin
from app.api.v1.deps import get_catalog_store
from app.schemas.auth import TokenClaims
from app.schemas.catalog import ServiceItem, ServiceUpsert
from app.schemas.common import MessageResponse
from app.services.catalog import ServiceCatalogStore

router = APIRouter()


@router.get("", response_model=list[ServiceItem])
def list_services(
    _user: Annotated[TokenClaims, Depends(get_current_user)],
    catalog: Annotated[ServiceCatalogStore, Depends(get_catalog_store)],
) -> list[ServiceItem]:
    """Services ordered by display_order."""
    return [ServiceItem.model_validate(s) for s in catalog.list_all()]


@router.put("", response_model=MessageResponse)
@router.post("", response_model=MessageResponse)
def replace_services(
    items: list[ServiceUpsert],
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    catalog: Annotated[ServiceCatalogStore, Depends(get_catalog_store)],
) -> MessageResponse:
    """
    Upsert the full desired catalog in one transaction (admin only).
    Either every entry is applied or none is.
    """
    catalog.bulk_replace(items)
    return MessageResponse(message="Services updated successfully")


@router.delete("/{service_id}", response_model=MessageResponse)
def delete_service(
    service_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    catalog: Annotated[ServiceCatalogStore, Depends(get_catalog_store)],
) -> MessageResponse:
    catalog.delete(service_id)
    return MessageResponse(message="Service deleted successfully")
