"""Authentication and invitation endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from agentxmap.api.deps import get_admin_id, get_identity_service
from agentxmap.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from agentxmap.schemas.errors import Envelope
from agentxmap.schemas.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    InvitationResponse,
    InviteRequest,
)
from agentxmap.services.identity_service import IdentityService

router = APIRouter()


@router.post("/register", response_model=Envelope, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    service: IdentityService = Depends(get_identity_service),
):
    """Create an organization and its first admin user."""
    user = await service.sign_up(payload.organization_name, payload.email, payload.password)
    return Envelope(success=True, data=UserResponse.model_validate(user))


@router.post("/login", response_model=Envelope, status_code=status.HTTP_200_OK)
async def login(
    payload: LoginRequest,
    service: IdentityService = Depends(get_identity_service),
):
    """Authenticate with email and password.

    Returns an opaque identifier in place of a signed session token.
    """
    user = await service.login(payload.email, payload.password)
    return Envelope(
        success=True,
        data=LoginResponse(token=f"opaque-{user.id}", user=UserResponse.model_validate(user)),
    )


@router.post("/invite", response_model=Envelope, status_code=status.HTTP_201_CREATED)
async def invite(
    payload: InviteRequest,
    admin_id: UUID = Depends(get_admin_id),
    service: IdentityService = Depends(get_identity_service),
):
    """Invite users to the acting admin's organization.

    Emails already registered are skipped and absent from the response.
    """
    invitations = await service.invite_users(admin_id, payload.recipients(), payload.role)
    return Envelope(
        success=True,
        data=[InvitationResponse.model_validate(invitation) for invitation in invitations],
    )


@router.post("/accept-invitation", response_model=Envelope, status_code=status.HTTP_200_OK)
async def accept_invitation(
    payload: AcceptInvitationRequest,
    service: IdentityService = Depends(get_identity_service),
):
    """Accept an invitation and create the invited user."""
    user = await service.accept_invitation(
        payload.token, payload.password, payload.first_name, payload.last_name
    )
    return Envelope(success=True, data=AcceptInvitationResponse.model_validate(user))
