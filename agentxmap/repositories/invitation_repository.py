"""Invitation persistence with compare-and-set status transitions."""
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from agentxmap.core.exceptions import InvalidInvitationTransition
from agentxmap.core.invitation_workflow import is_valid_transition
from agentxmap.models.enums import InvitationStatus
from agentxmap.models.invitation import Invitation


class InvitationRepository:
    """Data access for invitations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, invitation: Invitation) -> Invitation:
        """Insert an invitation.

        Raises:
            IntegrityError: If the token collides with an existing invitation
        """
        self.db.add(invitation)
        await self.db.flush()
        return invitation

    async def get_by_token(self, token: str) -> Invitation | None:
        result = await self.db.execute(
            select(Invitation)
            .options(joinedload(Invitation.organization))
            .where(Invitation.token == token)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update(self, invitation: Invitation) -> Invitation:
        await self.db.flush()
        return invitation

    async def transition_status(
        self,
        invitation_id: UUID,
        expected: InvitationStatus,
        new: InvitationStatus,
    ) -> bool:
        """Move an invitation from ``expected`` to ``new`` status atomically.

        The UPDATE is conditioned on the current status, so of two callers
        racing from the same expected status only one changes the row.

        Args:
            invitation_id: Invitation ID
            expected: Status the caller previously observed
            new: Target status

        Returns:
            True if the row was updated, False if its status no longer
            matched ``expected`` (or the invitation does not exist)

        Raises:
            InvalidInvitationTransition: If ``expected -> new`` is not allowed
        """
        if not is_valid_transition(expected, new):
            raise InvalidInvitationTransition(
                f"Cannot move invitation from {expected.value} to {new.value}"
            )

        result = await self.db.execute(
            update(Invitation)
            .where(Invitation.id == invitation_id, Invitation.status == expected)
            .values(status=new, updated_at=datetime.now(UTC))
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount == 1
