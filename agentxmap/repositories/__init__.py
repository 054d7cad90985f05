"""Repository layer for data access.

Repositories encapsulate SQLAlchemy queries for each entity. They flush but
never commit: the transaction boundary belongs to the caller.
"""

from agentxmap.repositories.invitation_repository import InvitationRepository
from agentxmap.repositories.organization_repository import OrganizationRepository
from agentxmap.repositories.tenant_repository import TenantRepository
from agentxmap.repositories.user_repository import UserRepository

__all__ = [
    "InvitationRepository",
    "OrganizationRepository",
    "TenantRepository",
    "UserRepository",
]
