"""SQLAlchemy models."""

from agentxmap.models.base import Base, BaseModel
from agentxmap.models.enums import InvitationStatus, UserRole
from agentxmap.models.invitation import Invitation
from agentxmap.models.organization import Organization
from agentxmap.models.user import User

__all__ = [
    "Base",
    "BaseModel",
    "UserRole",
    "InvitationStatus",
    "Organization",
    "User",
    "Invitation",
]
