"""Atomic creation of an organization together with its first admin."""
from sqlalchemy.ext.asyncio import AsyncSession

from agentxmap.models.organization import Organization
from agentxmap.models.user import User


class TenantRepository:
    """Writes that span the organization and user tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_tenant(self, organization: Organization, admin_user: User) -> User:
        """Create an organization and its admin user in one savepoint.

        If either insert fails, neither row survives.

        Raises:
            IntegrityError: If the slug or the admin email is already taken
        """
        async with self.db.begin_nested():
            self.db.add(organization)
            await self.db.flush()
            admin_user.org_id = organization.id
            admin_user.organization = organization
            self.db.add(admin_user)
            await self.db.flush()
        return admin_user
