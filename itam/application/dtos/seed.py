"""DTOs for the RBAC seed (no dependency on ORM)."""

from dataclasses import dataclass, field


@dataclass
class SeedReport:
    """Outcome of one seed run: which rows were inserted and which already existed."""

    created_permissions: list[str] = field(default_factory=list)
    existing_permissions: list[str] = field(default_factory=list)
    created_roles: list[str] = field(default_factory=list)
    existing_roles: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """True if this run inserted anything."""
        return bool(self.created_permissions or self.created_roles)
