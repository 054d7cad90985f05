"""Organization model."""
from sqlalchemy import CheckConstraint, Column, String
from sqlalchemy.orm import relationship

from agentxmap.models.base import BaseModel, SoftDeleteMixin


class Organization(SoftDeleteMixin, BaseModel):
    """Organization entity representing a tenant.

    The slug is derived from the name when the organization is created and
    never changes afterwards.
    """

    __tablename__ = "organizations"

    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)

    # Relationships
    users = relationship("User", back_populates="organization")
    invitations = relationship("Invitation", back_populates="organization")

    __table_args__ = (
        CheckConstraint("LENGTH(name) > 0", name="organization_name_not_empty"),
        CheckConstraint("LENGTH(slug) > 0", name="organization_slug_not_empty"),
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, slug={self.slug})>"
