"""Proposal submission endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from app.api.v1.auth import get_current_user
from app.api.v1.deps import get_proposal_store
from app.schemas.auth import TokenClaims
from app.schemas.proposals import ProposalCreated, ProposalItem
from app.services.proposals import ProposalStore

router = APIRouter()


@router.post("", response_model=ProposalCreated)
def create_proposal(
    data: Annotated[dict[str, Any], Body()],
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    proposals: Annotated[ProposalStore, Depends(get_proposal_store)],
) -> ProposalCreated:
    """Store the submitted proposal form (any JSON object) for the calling user."""
    proposal = proposals.create(current_user.id, data)
    return ProposalCreated(id=proposal.id)


@router.get("", response_model=list[ProposalItem])
def list_proposals(
    _user: Annotated[TokenClaims, Depends(get_current_user)],
    proposals: Annotated[ProposalStore, Depends(get_proposal_store)],
) -> list[ProposalItem]:
    return [ProposalItem.model_validate(p) for p in proposals.list_all()]
