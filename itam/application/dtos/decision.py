"""DTOs for authorization decisions (no dependency on HTTP or ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from itam.domain.enums import DecisionState, DenialReason, ScopeDimension
from itam.domain.exceptions import (
    ItamException,
    InsufficientPermissionException,
    NotAuthenticatedException,
    ScopeDeniedException,
)
from itam.domain.policies import Policy
from itam.domain.value_objects.core import ResourceScope
from itam.shared.utils.datetime import utc_now


@dataclass(frozen=True)
class Granted:
    """Operation may proceed. Carries the evaluated policy for downstream audit."""

    policy: Policy
    scope: ResourceScope | None = None

    granted: bool = field(default=True, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "granted": True,
            "policy": self.policy.to_dict(),
            "scope": self.scope.to_dict() if self.scope else None,
        }


@dataclass(frozen=True)
class Denied:
    """Operation rejected, with a reason from the denial taxonomy.

    required lists the permission key(s) the caller needs (for AllOf only
    the missing ones). denied_scope is set only for SCOPE_DENIED.
    """

    reason: DenialReason
    policy: Policy | None = None
    required: tuple[str, ...] = ()
    denied_scope: dict[str, Any] | None = None

    granted: bool = field(default=False, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "granted": False,
            "reason": self.reason.value,
            "policy": self.policy.to_dict() if self.policy else None,
            "required": list(self.required),
            "denied_scope": self.denied_scope,
        }

    def to_exception(self) -> ItamException:
        """Domain exception of the same kind, for boundaries that reject by raising."""
        if self.reason == DenialReason.NOT_AUTHENTICATED:
            return NotAuthenticatedException()
        if self.reason == DenialReason.SCOPE_DENIED:
            return ScopeDeniedException(
                required=self.required[0] if self.required else "",
                denied_scope=self.denied_scope or {},
            )
        return InsufficientPermissionException(
            required=self.required,
            policy=self.policy.kind if self.policy else None,
        )


Decision = Granted | Denied


@dataclass
class OperationContext:
    """Per-operation scratch space. The pipeline records what it evaluated here."""

    checked_policy: Policy | None = None
    resource_scope: ResourceScope | None = None
    decision: Decision | None = None


@dataclass(frozen=True)
class AuditRecord:
    """One observed transition of the decision gate."""

    principal_id: str | None
    policy: Policy
    state: DecisionState
    outcome: str
    reason: DenialReason | None = None
    scope: ResourceScope | None = None
    denied_dimension: ScopeDimension | None = None
    occurred_at: datetime = field(default_factory=utc_now)

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "principal_id": self.principal_id,
            "policy": self.policy.to_dict(),
            "state": self.state.value,
            "outcome": self.outcome,
            "reason": self.reason.value if self.reason else None,
            "scope": self.scope.to_dict() if self.scope else None,
            "denied_dimension": self.denied_dimension.value if self.denied_dimension else None,
            "occurred_at": self.occurred_at.isoformat(),
        }
