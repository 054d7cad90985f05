"""User persistence."""
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from agentxmap.models.user import User


class UserRepository:
    """Data access for users.

    Soft-deleted users are hidden from lookups unless explicitly requested.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user: User) -> User:
        """Insert a user and flush to surface constraint violations.

        Raises:
            IntegrityError: If the email is already registered
        """
        self.db.add(user)
        await self.db.flush()
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        result = await self.db.execute(
            select(User)
            .options(joinedload(User.organization))
            .where(User.id == user_id, User.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str, include_deleted: bool = False) -> User | None:
        """Look up a user by email.

        Soft-deleted users keep their email reserved, so checks for a free
        address pass ``include_deleted=True``.
        """
        query = (
            select(User)
            .options(joinedload(User.organization))
            .where(User.email == email)
        )
        if not include_deleted:
            query = query.where(User.deleted_at.is_(None))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def update(self, user: User) -> User:
        await self.db.flush()
        return user

    async def delete(self, user_id: UUID) -> bool:
        """Soft-delete a user.

        Returns:
            True if a user was marked deleted, False if none was found
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return False
        user.deleted_at = datetime.now(UTC)
        await self.db.flush()
        return True
