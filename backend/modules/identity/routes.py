"""
Profile endpoints: claim, register and the resolved session.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_identity_service
from api.middleware.auth import get_current_user
from api.routes.cors import preflight_response
from shared.models import AuthenticatedUser

from .interfaces import IIdentityService
from .models import (
    ClaimResponse,
    RegisterProfileRequest,
    RegisterProfileResponse,
    ResolvedSession,
)

router = APIRouter()


@router.options("/claim")
async def claim_preflight() -> Response:
    return preflight_response()


@router.post("/claim", response_model=ClaimResponse)
async def claim_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIdentityService = Depends(get_identity_service),
) -> ClaimResponse:
    """
    Link the shadow profile for the caller's verified email, if any.

    claimed is False when there was nothing to claim, the caller was
    already linked, or another session won the race.
    """
    result = await service.claim_shadow(user)
    return ClaimResponse(claimed=result.claimed)


@router.post("", response_model=RegisterProfileResponse)
async def register_profile(
    request: Optional[RegisterProfileRequest] = None,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIdentityService = Depends(get_identity_service),
) -> RegisterProfileResponse:
    """
    Ensure the caller has a profile.

    Claims a purchase-created profile when one exists for the email,
    otherwise creates a fresh one.
    """
    full_name = request.full_name if request else None
    result = await service.register_profile(user, full_name=full_name)
    return RegisterProfileResponse.from_result(result)


@router.get("/me", response_model=ResolvedSession)
async def get_session(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIdentityService = Depends(get_identity_service),
) -> ResolvedSession:
    """
    The caller's profile and entitlement.

    A degraded response means the profile store was unavailable; treat it
    as "retry later", not as a loss of premium.
    """
    return await service.resolve_entitlement(user)
