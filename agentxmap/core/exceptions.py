"""Domain exceptions raised by the identity service.

Each exception carries a stable ``code`` and the HTTP status the API layer
translates it to. Authentication and invitation errors use fixed, generic
messages so responses never reveal whether an account or token exists.
"""

from __future__ import annotations

from fastapi import status


class IdentityError(Exception):
    """Base class for all identity and invitation errors."""

    code = "identity_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(IdentityError):
    """Missing or malformed input, rejected before any write."""

    code = "validation_error"
    default_message = "Request validation failed"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message, details={field: message})


class ConflictError(IdentityError):
    """Write conflicts with existing state."""

    code = "conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource conflict"


class UserAlreadyExists(ConflictError):
    code = "user_already_exists"
    default_message = "User already exists"


class OrganizationAlreadyExists(ConflictError):
    code = "organization_already_exists"
    default_message = "Organization already exists"


class TokenCollisionError(ConflictError):
    code = "token_collision"
    default_message = "Could not allocate a unique invitation token"


class InvitationStateConflict(ConflictError):
    """Invitation status changed between read and write."""

    code = "invitation_state_conflict"
    default_message = "Invitation was modified concurrently"


class InvalidCredentials(IdentityError):
    code = "invalid_credentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class InsufficientPermissions(IdentityError):
    code = "insufficient_permissions"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions to invite users"


class InvitorNotFound(IdentityError):
    code = "invitor_not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Invitor not found"


class InvitationError(IdentityError):
    """Base class for invitation lifecycle errors."""

    code = "invitation_error"
    default_message = "Invitation cannot be used"


class InvalidInvitationToken(InvitationError):
    code = "invalid_invitation_token"
    default_message = "Invalid invitation token"


class InvitationNotPending(InvitationError):
    code = "invitation_not_pending"
    default_message = "Invitation is not pending"


class InvitationExpired(InvitationError):
    code = "invitation_expired"
    default_message = "Invitation expired"


class InvalidInvitationTransition(InvitationError):
    code = "invalid_invitation_transition"
    default_message = "Invalid invitation status transition"


class DependencyError(IdentityError):
    """A required dependency (entropy source, database) failed."""

    code = "dependency_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Service temporarily unavailable"


class EncodingError(DependencyError):
    code = "encoding_error"
    default_message = "Password could not be encoded"


class EntropyError(DependencyError):
    code = "entropy_error"
    default_message = "Secure random source unavailable"
