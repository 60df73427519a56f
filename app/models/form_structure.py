"""ORM model for published form layouts. Rows are only ever inserted."""

from sqlalchemy import JSON, Column, DateTime, Integer, func

from app.models.base import Base


class FormStructureVersion(Base):
    """One published form structure; the newest row is the current form."""

    __tablename__ = "form_structure"

    id = Column(Integer, primary_key=True, autoincrement=True)
    structure = Column(JSON, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
