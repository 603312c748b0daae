"""Principal: the authenticated actor attached to an operation.

Carries a denormalized permission snapshot plus branch/enterprise
assignments. The snapshot is taken when a role is assigned (or at login)
and is never recomputed by walking roles during a decision.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from itam.domain.entities.role import RoleEntity
from itam.domain.value_objects.core import normalize_key


def _as_id_set(values: Iterable[object] | None) -> frozenset[str]:
    if values is None:
        return frozenset()
    if isinstance(values, (str, bytes)):
        values = [values]
    return frozenset(str(value) for value in values if value is not None and str(value) != "")


@dataclass(frozen=True)
class Principal:
    """Immutable authorization view of an authenticated user.

    Empty assigned_branches / assigned_enterprises mean no assignment was
    ever made for that dimension (see the scope evaluator for how that is
    interpreted).
    """

    id: str
    permissions: frozenset[str] = field(default_factory=frozenset)
    assigned_branches: frozenset[str] = field(default_factory=frozenset)
    assigned_enterprises: frozenset[str] = field(default_factory=frozenset)
    role_name: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Principal id must be a non-empty string")
        object.__setattr__(
            self,
            "permissions",
            frozenset(normalize_key(key) for key in (self.permissions or ()) if isinstance(key, str)),
        )
        object.__setattr__(self, "assigned_branches", _as_id_set(self.assigned_branches))
        object.__setattr__(self, "assigned_enterprises", _as_id_set(self.assigned_enterprises))

    @classmethod
    def from_role(
        cls,
        principal_id: str,
        role: RoleEntity,
        assigned_branches: Iterable[object] | None = None,
        assigned_enterprises: Iterable[object] | None = None,
    ) -> "Principal":
        """Snapshot the role's current permission set onto a new principal."""
        return cls(
            id=principal_id,
            permissions=frozenset(role.permissions),
            assigned_branches=_as_id_set(assigned_branches),
            assigned_enterprises=_as_id_set(assigned_enterprises),
            role_name=role.name,
        )
