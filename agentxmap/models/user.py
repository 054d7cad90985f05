"""User model."""
from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from agentxmap.models.base import BaseModel, SoftDeleteMixin
from agentxmap.models.enums import UserRole


class User(SoftDeleteMixin, BaseModel):
    """User entity bound to exactly one organization.

    Email is unique across the whole system, not only within the
    organization. Names are optional until an invitation is accepted.
    """

    __tablename__ = "users"

    org_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=UserRole.USER,
    )
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    # Relationships
    organization = relationship("Organization", back_populates="users")
    invitations_sent = relationship(
        "Invitation",
        back_populates="invitor",
        foreign_keys="Invitation.invitor_id",
    )

    def __repr__(self) -> str:
        # password_hash deliberately omitted
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
