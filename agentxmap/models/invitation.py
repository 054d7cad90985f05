"""Invitation model."""
from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from agentxmap.models.base import BaseModel
from agentxmap.models.enums import InvitationStatus, UserRole


class Invitation(BaseModel):
    """Single-use, time-bounded offer to join an organization with a role.

    Invitations start PENDING and move to exactly one terminal status:
    ACCEPTED, EXPIRED or REVOKED.
    """

    __tablename__ = "invitations"

    org_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    invitor_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    email = Column(String(255), nullable=False, index=True)
    token = Column(String(128), nullable=False, unique=True, index=True)
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    status = Column(
        SQLEnum(
            InvitationStatus,
            name="invitation_status",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
        default=InvitationStatus.PENDING,
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    # Relationships
    organization = relationship("Organization", back_populates="invitations")
    invitor = relationship(
        "User",
        back_populates="invitations_sent",
        foreign_keys=[invitor_id],
    )

    def __repr__(self) -> str:
        # token deliberately omitted
        return f"<Invitation(id={self.id}, email={self.email}, status={self.status})>"
