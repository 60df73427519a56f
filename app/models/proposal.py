"""ORM model for submitted proposals."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, func

from app.models.base import Base


class Proposal(Base):
    """
    One submitted proposal form.

    data holds the client's payload as-is; one row per submission.
    """

    __tablename__ = "proposals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    data = Column(JSON, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
