"""Role and RolePermission ORM models.

Role permissions are stored by key rather than by catalog row id: the
wildcard '*' is assignable but is not a catalog entry.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from itam.infrastructure.persistence.database import Base
from itam.infrastructure.persistence.models.mixins import CuidMixin, IdentifiedModel


class Role(IdentifiedModel, Base):
    """Role. Table: role. Unique name."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False, default="custom")
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    can_manage_multiple_branches: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    can_manage_multiple_enterprises: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    is_protected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    permissions: Mapped[list["RolePermission"]] = relationship(
        back_populates="role",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class RolePermission(CuidMixin, Base):
    """Role-permission assignment. Table: role_permission."""

    __tablename__ = "role_permission"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False, index=True
    )
    permission_key: Mapped[str] = mapped_column(String(100), nullable=False)

    role: Mapped[Role] = relationship(back_populates="permissions")

    __table_args__ = (
        UniqueConstraint("role_id", "permission_key", name="uq_role_permission"),
    )
