"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from agentxmap.models.enums import UserRole


class RegisterRequest(BaseModel):
    """Request schema for tenant sign-up.

    Used for POST /auth/register. Creates an organization and its first
    admin user.
    """

    organization_name: str = Field(
        ..., min_length=1, max_length=255, description="Organization display name"
    )
    email: EmailStr = Field(..., description="Email address of the admin user")
    password: str = Field(..., min_length=1, description="Password of the admin user")

    @field_validator("organization_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Organization name cannot be empty")
        return v.strip()


class LoginRequest(BaseModel):
    """Request schema for POST /auth/login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class OrganizationResponse(BaseModel):
    id: UUID = Field(..., description="Organization unique identifier")
    name: str = Field(..., description="Organization display name")
    slug: str = Field(..., description="URL-safe organization identifier")

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """User information returned to clients. Never includes the password hash."""

    id: UUID = Field(..., description="User unique identifier")
    org_id: UUID = Field(..., description="Organization ID")
    email: str = Field(..., description="User email address")
    role: UserRole = Field(..., description="User role (admin, manager, user)")
    first_name: str | None = Field(None, description="First name")
    last_name: str | None = Field(None, description="Last name")
    created_at: datetime = Field(..., description="Account creation timestamp")
    organization: OrganizationResponse | None = Field(None, description="Owning organization")

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Response schema for POST /auth/login.

    The token is an opaque identifier, not a signed session token.
    """

    token: str = Field(..., description="Opaque session identifier")
    user: UserResponse
