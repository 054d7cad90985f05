"""Enumerations for user roles and invitation statuses."""

from enum import Enum


class UserRole(str, Enum):
    """User role within an organization.

    ADMIN and MANAGER may invite new members; USER may not.
    """

    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"

    @property
    def can_invite(self) -> bool:
        return self in (UserRole.ADMIN, UserRole.MANAGER)


class InvitationStatus(str, Enum):
    """Invitation lifecycle status.

    PENDING is the only non-terminal state. REVOKED is reserved for
    administrative cancellation.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"
