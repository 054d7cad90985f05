"""Pydantic schemas for invitation endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from agentxmap.models.enums import InvitationStatus, UserRole


class InviteRequest(BaseModel):
    """Request schema for POST /auth/invite.

    Accepts either a single ``email`` or a list of ``emails``.
    """

    email: EmailStr | None = Field(None, description="Email address to invite")
    emails: list[EmailStr] = Field(default_factory=list, description="Email addresses to invite")
    role: UserRole = Field(..., description="Role granted when the invitation is accepted")

    @model_validator(mode="after")
    def _require_recipient(self) -> "InviteRequest":
        if self.email is None and not self.emails:
            raise ValueError("Either email or emails must be provided")
        return self

    def recipients(self) -> list[str]:
        recipients = list(self.emails)
        if self.email is not None:
            recipients.insert(0, self.email)
        return recipients


class InvitationResponse(BaseModel):
    """Invitation details, including the token to deliver to the invitee."""

    id: UUID = Field(..., description="Invitation unique identifier")
    org_id: UUID = Field(..., description="Organization ID")
    invitor_id: UUID = Field(..., description="ID of the inviting user")
    email: str = Field(..., description="Invitee email address")
    role: UserRole = Field(..., description="Assigned role")
    status: InvitationStatus = Field(..., description="Invitation status")
    token: str = Field(..., description="Invitation token")
    expires_at: datetime = Field(..., description="Invitation expiry timestamp")

    model_config = ConfigDict(from_attributes=True)


class AcceptInvitationRequest(BaseModel):
    """Request schema for POST /auth/accept-invitation."""

    token: str = Field(..., min_length=1, description="Invitation token")
    password: str = Field(..., min_length=1, description="Password for the new account")
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")


class AcceptInvitationResponse(BaseModel):
    id: UUID = Field(..., description="User unique identifier")
    email: str = Field(..., description="User email address")

    model_config = ConfigDict(from_attributes=True)
