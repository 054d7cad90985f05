"""Invitation status workflow state machine."""

from datetime import UTC, datetime

from agentxmap.models.enums import InvitationStatus

# Valid status transitions for invitation lifecycle
# Key: current status, Value: list of allowed next statuses
VALID_TRANSITIONS: dict[InvitationStatus, list[InvitationStatus]] = {
    InvitationStatus.PENDING: [
        InvitationStatus.ACCEPTED,
        InvitationStatus.EXPIRED,
        InvitationStatus.REVOKED,
    ],
    InvitationStatus.ACCEPTED: [],  # Terminal
    InvitationStatus.EXPIRED: [],  # Terminal
    InvitationStatus.REVOKED: [],  # Terminal
}


def is_valid_transition(from_status: InvitationStatus, to_status: InvitationStatus) -> bool:
    """Check if a status transition is valid.

    Args:
        from_status: Current invitation status
        to_status: Target invitation status

    Returns:
        True if the transition is allowed, False otherwise

    Examples:
        >>> is_valid_transition(InvitationStatus.PENDING, InvitationStatus.ACCEPTED)
        True
        >>> is_valid_transition(InvitationStatus.EXPIRED, InvitationStatus.PENDING)
        False
    """
    return to_status in VALID_TRANSITIONS.get(from_status, [])


def get_allowed_transitions(from_status: InvitationStatus) -> list[InvitationStatus]:
    """Get list of allowed transitions from a given status."""
    return VALID_TRANSITIONS.get(from_status, [])


def is_terminal(status: InvitationStatus) -> bool:
    """Return True if no transition leaves ``status``."""
    return not get_allowed_transitions(status)


def is_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    """Check whether an invitation expiry timestamp has been reached.

    Naive timestamps (as returned by databases without timezone support)
    are interpreted as UTC.

    Args:
        expires_at: Invitation expiry timestamp
        now: Reference time (defaults to current UTC time)

    Returns:
        True if ``now >= expires_at``
    """
    if now is None:
        now = datetime.now(UTC)
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now >= expires_at
