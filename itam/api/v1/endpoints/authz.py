"""Authorization API: evaluate a policy for the current principal without rejecting."""

from typing import Annotated

from fastapi import APIRouter, Depends

from itam.api.v1.dependencies import get_authorization_service, require_authenticated
from itam.application.services.authorization_service import AuthorizationService
from itam.domain.entities.principal import Principal
from itam.domain.policies import policy_from_dict
from itam.schemas.authz import AuthzCheckRequest, DecisionResponse

router = APIRouter()


@router.post("/check", response_model=DecisionResponse)
async def check_policy(
    body: AuthzCheckRequest,
    principal: Annotated[Principal, Depends(require_authenticated)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Return the Granted/Denied decision for policy against target (200 either way)."""
    policy = policy_from_dict(body.policy.model_dump(exclude_none=True))
    decision = auth_svc.evaluate(principal, policy, body.target)
    return DecisionResponse(**decision.to_dict())
