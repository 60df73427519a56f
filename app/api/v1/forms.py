"""Form structure endpoints: read the live form, publish a new version, browse history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.auth import get_current_user, require_admin
from app.api.v1.deps import get_form_store
from app.schemas.auth import TokenClaims
from app.schemas.common import MessageResponse
from app.schemas.forms import (
    FormStructureResponse,
    FormStructureSaveRequest,
    FormStructureVersionItem,
)
from app.services.forms import FormStructureStore

router = APIRouter()


@router.get("", response_model=FormStructureResponse)
def get_form_structure(
    _user: Annotated[TokenClaims, Depends(get_current_user)],
    forms: Annotated[FormStructureStore, Depends(get_form_store)],
) -> FormStructureResponse:
    return FormStructureResponse(structure=forms.get_current())


@router.post("", response_model=MessageResponse)
def save_form_structure(
    body: FormStructureSaveRequest,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    forms: Annotated[FormStructureStore, Depends(get_form_store)],
) -> MessageResponse:
    """
    Publish a new form layout. The body is {"structure": [section, ...]}
    where each section has a title and a list of fields. Previous layouts
    are kept and can be listed via /form-structure/history.
    """
    forms.save(body.structure)
    return MessageResponse(message="Form structure saved successfully")


@router.get("/history", response_model=list[FormStructureVersionItem])
def form_structure_history(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    forms: Annotated[FormStructureStore, Depends(get_form_store)],
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
) -> list[FormStructureVersionItem]:
    return [FormStructureVersionItem.model_validate(v) for v in forms.history(limit)]
