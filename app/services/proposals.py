"""Proposal store: append one row per submitted proposal."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.models import Proposal

logger = logging.getLogger(__name__)


class ProposalStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, user_id: int, data: dict[str, Any]) -> Proposal:
        proposal = Proposal(user_id=user_id, data=data)
        self.session.add(proposal)
        self.session.commit()
        self.session.refresh(proposal)
        logger.info("Stored proposal id=%s for user_id=%s", proposal.id, user_id)
        return proposal

    def list_all(self) -> list[Proposal]:
        """All proposals, newest first."""
        return (
            self.session.query(Proposal)
            .order_by(Proposal.created_at.desc(), Proposal.id.desc())
            .all()
        )
