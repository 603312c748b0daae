"""Authorization service: the per-operation decision pipeline.

Composes the permission resolver and the scope evaluator into one gate:

    UNAUTHENTICATED -> PERMISSION_CHECKED -> SCOPE_CHECKED -> GRANTED
                 \\______________\\_______________\\____> DENIED

Evaluation is synchronous and pure over the principal snapshot and the
operation target. It always returns a Decision (Granted or Denied); use
require() at boundaries that reject by raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from itam.application.dtos.decision import (
    AuditRecord,
    Decision,
    Denied,
    Granted,
    OperationContext,
)
from itam.application.services.permission_resolver import (
    has_any_permission,
    has_permission,
    missing_permissions,
)
from itam.application.services.scope_evaluator import denied_dimension
from itam.domain.entities.principal import Principal
from itam.domain.enums import DecisionState, DenialReason, ScopeDimension
from itam.domain.policies import AllOf, AnyOf, Policy, ScopedSingle
from itam.domain.value_objects.core import ResourceScope

logger = logging.getLogger(__name__)

AuditHook = Callable[[AuditRecord], None]
Target = Mapping[str, Any] | Sequence[Mapping[str, Any]] | None


def _first_value(sources: Sequence[Mapping[str, Any]], field_name: str) -> Any:
    for source in sources:
        if not isinstance(source, Mapping):
            continue
        value = source.get(field_name)
        if value is not None and value != "":
            return value
    return None


def extract_resource_scope(
    target: Target,
    branch_field: str,
    enterprise_field: str,
) -> ResourceScope:
    """Read branch/enterprise ids from the operation target.

    target is one mapping or an ordered sequence of mappings (e.g. body,
    path params, query); the first non-empty value for a field wins.
    """
    if target is None:
        sources: Sequence[Mapping[str, Any]] = ()
    elif isinstance(target, Mapping):
        sources = (target,)
    else:
        sources = tuple(target)
    return ResourceScope(
        branch_id=_first_value(sources, branch_field),
        enterprise_id=_first_value(sources, enterprise_field),
    )


class AuthorizationService:
    """Centralized decision gate; optional audit hook observes every transition.

    The audit hook is an observer only: its return value is ignored and
    any exception it raises is logged without affecting the decision.
    """

    def __init__(self, audit_hook: AuditHook | None = None) -> None:
        self.audit_hook = audit_hook

    def evaluate(
        self,
        principal: Principal | None,
        policy: Policy,
        target: Target = None,
        context: OperationContext | None = None,
    ) -> Decision:
        """Run the gate for one operation and return Granted or Denied."""
        decision = self._evaluate(principal, policy, target, context)
        if context is not None:
            context.decision = decision
        return decision

    def check(
        self,
        principal: Principal | None,
        policy: Policy,
        target: Target = None,
    ) -> bool:
        """True if the operation would be granted (flag-style checks that never reject)."""
        return isinstance(self.evaluate(principal, policy, target), Granted)

    def require(
        self,
        principal: Principal | None,
        policy: Policy,
        target: Target = None,
        context: OperationContext | None = None,
    ) -> Granted:
        """Return Granted or raise the domain exception matching the denial reason."""
        decision = self.evaluate(principal, policy, target, context)
        if isinstance(decision, Denied):
            raise decision.to_exception()
        return decision

    def _evaluate(
        self,
        principal: Principal | None,
        policy: Policy,
        target: Target,
        context: OperationContext | None,
    ) -> Decision:
        if principal is None:
            return self._deny(
                None,
                policy,
                DenialReason.NOT_AUTHENTICATED,
                required=policy.required,
            )

        granted_permission, required = self._check_permission(principal, policy)
        if not granted_permission:
            return self._deny(
                principal.id,
                policy,
                DenialReason.INSUFFICIENT_PERMISSION,
                required=required,
            )
        self._observe(principal.id, policy, DecisionState.PERMISSION_CHECKED, "passed")

        scope: ResourceScope | None = None
        if isinstance(policy, ScopedSingle):
            scope = extract_resource_scope(target, policy.branch_field, policy.enterprise_field)
            dimension = denied_dimension(principal, scope)
            if dimension is not None:
                return self._deny(
                    principal.id,
                    policy,
                    DenialReason.SCOPE_DENIED,
                    required=policy.required,
                    scope=scope,
                    dimension=dimension,
                )
            self._observe(principal.id, policy, DecisionState.SCOPE_CHECKED, "passed", scope=scope)

        if context is not None:
            context.checked_policy = policy
            context.resource_scope = scope
        self._observe(principal.id, policy, DecisionState.GRANTED, "granted", scope=scope)
        return Granted(policy=policy, scope=scope)

    @staticmethod
    def _check_permission(principal: Principal, policy: Policy) -> tuple[bool, tuple[str, ...]]:
        """Return (granted, keys to report if denied)."""
        permissions = principal.permissions
        if isinstance(policy, AnyOf):
            return has_any_permission(permissions, policy.keys), policy.keys
        if isinstance(policy, AllOf):
            missing = missing_permissions(permissions, policy.keys)
            return not missing, missing
        return has_permission(permissions, policy.key), policy.required

    def _deny(
        self,
        principal_id: str | None,
        policy: Policy,
        reason: DenialReason,
        *,
        required: tuple[str, ...],
        scope: ResourceScope | None = None,
        dimension: ScopeDimension | None = None,
    ) -> Denied:
        denied_scope = None
        if dimension is not None and scope is not None:
            denied_scope = {"dimension": dimension.value, **scope.to_dict()}
        self._observe(
            principal_id,
            policy,
            DecisionState.DENIED,
            "denied",
            reason=reason,
            scope=scope,
            dimension=dimension,
        )
        return Denied(
            reason=reason,
            policy=policy,
            required=required,
            denied_scope=denied_scope,
        )

    def _observe(
        self,
        principal_id: str | None,
        policy: Policy,
        state: DecisionState,
        outcome: str,
        *,
        reason: DenialReason | None = None,
        scope: ResourceScope | None = None,
        dimension: ScopeDimension | None = None,
    ) -> None:
        if self.audit_hook is None:
            return
        record = AuditRecord(
            principal_id=principal_id,
            policy=policy,
            state=state,
            outcome=outcome,
            reason=reason,
            scope=scope,
            denied_dimension=dimension,
        )
        try:
            self.audit_hook(record)
        except Exception:
            logger.exception(
                "Authorization audit hook failed (state=%s, principal=%s); decision unaffected",
                state.value,
                principal_id,
            )
