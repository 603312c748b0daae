"""Permission ORM model (catalog)."""

from sqlalchemy import Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from itam.infrastructure.persistence.database import Base
from itam.infrastructure.persistence.models.mixins import IdentifiedModel


class Permission(IdentifiedModel, Base):
    """Permission. Table: permission. Unique key; resource:action split for lookups."""

    __tablename__ = "permission"

    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    resource: Mapped[str] = mapped_column(String(50), nullable=False)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_critical: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (Index("ix_permission_resource_action", "resource", "action"),)
