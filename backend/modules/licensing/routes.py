"""
License activation endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_activation_service
from api.middleware.auth import get_current_user
from api.routes.cors import preflight_response
from shared.models import AuthenticatedUser

from .interfaces import ILicenseActivationService
from .models import ActivationRequest, ActivationResponse

router = APIRouter()


@router.options("/activate")
async def activate_preflight() -> Response:
    return preflight_response()


@router.post("/activate", response_model=ActivationResponse)
async def activate_license(
    request: Optional[ActivationRequest] = None,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ILicenseActivationService = Depends(get_activation_service),
) -> ActivationResponse:
    """
    Activate a license key for the calling user.

    The key is checked with the license authority before anything is
    written. Re-activating refreshes the premium window.
    """
    license_key = request.license_key if request else None
    result = await service.activate(user, license_key)
    return ActivationResponse(premium_expires_at=result.premium_expires_at)
