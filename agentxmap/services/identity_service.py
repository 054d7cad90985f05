"""Identity service for tenant sign-up, login and invitations.

Coordinates writes across organizations, users and invitations. Storage is
delegated to the repositories; this service owns the transaction boundary
and commits once an operation has fully succeeded.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from functools import lru_cache
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agentxmap.core.config import Settings, get_settings
from agentxmap.core.exceptions import (
    InsufficientPermissions,
    InvalidCredentials,
    InvalidInvitationToken,
    InvitationExpired,
    InvitationNotPending,
    InvitationStateConflict,
    InvitorNotFound,
    OrganizationAlreadyExists,
    TokenCollisionError,
    UserAlreadyExists,
    ValidationError,
)
from agentxmap.core.invitation_workflow import is_expired
from agentxmap.core.security import (
    MAX_PASSWORD_BYTES,
    generate_invitation_token,
    hash_password,
    verify_password,
)
from agentxmap.core.slug import slugify
from agentxmap.core.structured_logging import log_json
from agentxmap.models.enums import InvitationStatus, UserRole
from agentxmap.models.invitation import Invitation
from agentxmap.models.organization import Organization
from agentxmap.models.user import User
from agentxmap.repositories.invitation_repository import InvitationRepository
from agentxmap.repositories.organization_repository import OrganizationRepository
from agentxmap.repositories.tenant_repository import TenantRepository
from agentxmap.repositories.user_repository import UserRepository

module_logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return hash_password("not-a-real-password", rounds=rounds)


def normalize_email(email: str | None) -> str:
    """Trim and lower-case an email address for lookups and storage."""
    return (email or "").strip().lower()


class InviteOutcomeStatus(str, Enum):
    INVITED = "invited"
    SKIPPED_EXISTING_USER = "skipped_existing_user"


@dataclass
class InviteOutcome:
    """Result of inviting a single email address."""

    email: str
    status: InviteOutcomeStatus
    invitation: Invitation | None = None


class IdentityService:
    """Service for identity and invitation lifecycle management."""

    # One initial attempt plus one retry on token collision
    INVITATION_TOKEN_ATTEMPTS = 2

    def __init__(
        self,
        db: AsyncSession,
        *,
        users: UserRepository | None = None,
        organizations: OrganizationRepository | None = None,
        invitations: InvitationRepository | None = None,
        tenants: TenantRepository | None = None,
        settings: Settings | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize identity service.

        Args:
            db: Database session; also the transaction boundary
            users: User repository (defaults to one bound to ``db``)
            organizations: Organization repository
            invitations: Invitation repository
            tenants: Repository for atomic organization + admin creation
            settings: Application settings
            logger: Logger receiving diagnostic events
        """
        self.db = db
        self.users = users or UserRepository(db)
        self.organizations = organizations or OrganizationRepository(db)
        self.invitations = invitations or InvitationRepository(db)
        self.tenants = tenants or TenantRepository(db)
        self.settings = settings or get_settings()
        self.logger = logger or module_logger

    async def sign_up(self, organization_name: str, email: str, password: str) -> User:
        """Create an organization together with its first admin user.

        Args:
            organization_name: Display name of the new organization
            email: Admin email address
            password: Admin password

        Returns:
            Created admin User with its organization attached

        Raises:
            ValidationError: If a field is missing or malformed
            UserAlreadyExists: If the email is already registered
            OrganizationAlreadyExists: If the derived slug is taken
        """
        name = (organization_name or "").strip()
        if not name:
            raise ValidationError("organization_name", "Organization name is required")
        email = self._require_email(email)
        self._validate_password(password)

        if await self.users.get_by_email(email, include_deleted=True) is not None:
            raise UserAlreadyExists()

        slug = slugify(name)
        if not slug:
            raise ValidationError(
                "organization_name", "Organization name must contain letters or digits"
            )
        if await self.organizations.get_by_slug(slug) is not None:
            raise OrganizationAlreadyExists()

        password_hash = hash_password(password, rounds=self.settings.bcrypt_rounds)

        organization = Organization(name=name, slug=slug)
        admin = User(email=email, password_hash=password_hash, role=UserRole.ADMIN)
        try:
            await self.tenants.create_tenant(organization, admin)
        except IntegrityError as exc:
            # Lost a race against a concurrent sign-up; nothing was written
            if await self.users.get_by_email(email, include_deleted=True) is not None:
                raise UserAlreadyExists() from exc
            raise OrganizationAlreadyExists() from exc

        await self.db.commit()

        log_json(
            self.logger,
            logging.INFO,
            "tenant_created",
            org_id=organization.id,
            slug=organization.slug,
            user_id=admin.id,
        )
        return admin

    async def login(self, email: str, password: str) -> User:
        """Authenticate a user by email and password.

        Unknown emails, wrong passwords and lookup failures all raise the
        same error so callers cannot enumerate accounts.

        Raises:
            InvalidCredentials: If authentication fails for any reason
        """
        email = normalize_email(email)
        try:
            user = await self.users.get_by_email(email) if email else None
        except SQLAlchemyError as exc:
            log_json(
                self.logger,
                logging.ERROR,
                "login_lookup_failed",
                exception=exc.__class__.__name__,
            )
            raise InvalidCredentials() from exc

        if user is None:
            # Spend the same bcrypt work as a real check
            verify_password(password or "", _dummy_hash(self.settings.bcrypt_rounds))
            log_json(self.logger, logging.INFO, "login_failed")
            raise InvalidCredentials()

        if not verify_password(password or "", user.password_hash):
            log_json(self.logger, logging.INFO, "login_failed", user_id=user.id)
            raise InvalidCredentials()

        log_json(self.logger, logging.INFO, "login_succeeded", user_id=user.id)
        return user

    async def invite_users(
        self, invitor_id: UUID, emails: Iterable[str], role: UserRole
    ) -> list[Invitation]:
        """Create pending invitations for every email not yet registered.

        Emails that already belong to a user, soft-deleted users included,
        are skipped without error and are absent from the result. See
        ``invite_users_detailed`` for the per-email outcome.

        Returns:
            Created invitations, in request order
        """
        outcomes = await self.invite_users_detailed(invitor_id, emails, role)
        return [o.invitation for o in outcomes if o.invitation is not None]

    async def invite_users_detailed(
        self, invitor_id: UUID, emails: Iterable[str], role: UserRole
    ) -> list[InviteOutcome]:
        """Invite a batch of emails and report the outcome of each one.

        Args:
            invitor_id: ID of the inviting user (admin or manager)
            emails: Email addresses to invite; duplicates are collapsed
            role: Role granted on acceptance

        Returns:
            One InviteOutcome per distinct email, in request order

        Raises:
            InvitorNotFound: If the invitor does not exist
            InsufficientPermissions: If the invitor may not invite
            ValidationError: If an email is empty or the role is unknown
            TokenCollisionError: If no unique token could be allocated
        """
        invitor = await self.users.get_by_id(invitor_id)
        if invitor is None:
            raise InvitorNotFound()

        if not invitor.role.can_invite:
            log_json(
                self.logger,
                logging.WARNING,
                "invitation_forbidden",
                invitor_id=invitor.id,
                role=invitor.role.value,
            )
            raise InsufficientPermissions()

        try:
            role = UserRole(role)
        except ValueError:
            raise ValidationError("role", f"Unknown role: {role}") from None

        targets: list[str] = []
        for raw in emails:
            email = normalize_email(raw)
            if not email:
                raise ValidationError("emails", "Email addresses must not be empty")
            if email not in targets:
                targets.append(email)

        expires_at = datetime.now(UTC) + timedelta(hours=self.settings.invitation_expiry_hours)
        outcomes: list[InviteOutcome] = []
        try:
            for email in targets:
                if await self.users.get_by_email(email, include_deleted=True) is not None:
                    outcomes.append(
                        InviteOutcome(email=email, status=InviteOutcomeStatus.SKIPPED_EXISTING_USER)
                    )
                    continue
                invitation = await self._create_invitation(invitor, email, role, expires_at)
                outcomes.append(
                    InviteOutcome(
                        email=email, status=InviteOutcomeStatus.INVITED, invitation=invitation
                    )
                )
        except Exception:
            await self.db.rollback()
            raise

        await self.db.commit()

        log_json(
            self.logger,
            logging.INFO,
            "invitations_created",
            invitor_id=invitor.id,
            org_id=invitor.org_id,
            role=role.value,
            created=sum(1 for o in outcomes if o.status is InviteOutcomeStatus.INVITED),
            skipped=sum(
                1 for o in outcomes if o.status is InviteOutcomeStatus.SKIPPED_EXISTING_USER
            ),
        )
        return outcomes

    async def accept_invitation(
        self,
        token: str,
        password: str,
        first_name: str | None,
        last_name: str | None,
    ) -> User:
        """Accept an invitation and create the invited user.

        Args:
            token: Invitation token
            password: Password for the new account
            first_name: First name of the new user
            last_name: Last name of the new user

        Returns:
            Created User

        Raises:
            ValidationError: If the password is missing or too long
            InvalidInvitationToken: If no invitation has this token
            InvitationNotPending: If the invitation is no longer pending
            InvitationExpired: If the invitation expired (it is marked expired)
            UserAlreadyExists: If the email was registered in the meantime
            InvitationStateConflict: If a concurrent request changed the status
        """
        self._validate_password(password)

        invitation = await self.invitations.get_by_token(token) if token else None
        if invitation is None:
            raise InvalidInvitationToken()

        if invitation.status != InvitationStatus.PENDING:
            raise InvitationNotPending()

        if is_expired(invitation.expires_at):
            expired = await self.invitations.transition_status(
                invitation.id, InvitationStatus.PENDING, InvitationStatus.EXPIRED
            )
            await self.db.commit()
            if not expired:
                raise InvitationNotPending()
            log_json(self.logger, logging.INFO, "invitation_expired", invitation_id=invitation.id)
            raise InvitationExpired()

        password_hash = hash_password(password, rounds=self.settings.bcrypt_rounds)
        user = User(
            org_id=invitation.org_id,
            organization=invitation.organization,
            email=invitation.email,
            password_hash=password_hash,
            role=invitation.role,
            first_name=first_name,
            last_name=last_name,
        )
        try:
            async with self.db.begin_nested():
                await self.users.create(user)
        except IntegrityError as exc:
            raise UserAlreadyExists() from exc

        try:
            async with self.db.begin_nested():
                marked = await self.invitations.transition_status(
                    invitation.id, InvitationStatus.PENDING, InvitationStatus.ACCEPTED
                )
        except SQLAlchemyError as exc:
            # The user exists; an unmarked invitation is tolerated
            log_json(
                self.logger,
                logging.ERROR,
                "invitation_accept_mark_failed",
                invitation_id=invitation.id,
                user_id=user.id,
                exception=exc.__class__.__name__,
            )
        else:
            if not marked:
                await self.db.rollback()
                raise InvitationStateConflict()

        await self.db.commit()

        log_json(
            self.logger,
            logging.INFO,
            "invitation_accepted",
            invitation_id=invitation.id,
            user_id=user.id,
            org_id=user.org_id,
        )
        return user

    def _require_email(self, email: str | None) -> str:
        email = normalize_email(email)
        if not email:
            raise ValidationError("email", "Email is required")
        return email

    @staticmethod
    def _validate_password(password: str | None) -> None:
        if not password:
            raise ValidationError("password", "Password is required")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                "password", f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            )

    async def _create_invitation(
        self,
        invitor: User,
        email: str,
        role: UserRole,
        expires_at: datetime,
    ) -> Invitation:
        for attempt in range(1, self.INVITATION_TOKEN_ATTEMPTS + 1):
            invitation = Invitation(
                org_id=invitor.org_id,
                invitor_id=invitor.id,
                email=email,
                token=generate_invitation_token(),
                role=role,
                status=InvitationStatus.PENDING,
                expires_at=expires_at,
            )
            try:
                async with self.db.begin_nested():
                    await self.invitations.create(invitation)
            except IntegrityError:
                log_json(
                    self.logger,
                    logging.WARNING,
                    "invitation_token_collision",
                    invitor_id=invitor.id,
                    attempt=attempt,
                )
                continue
            return invitation
        raise TokenCollisionError()
