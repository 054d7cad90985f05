"""Create the initial admin user on application startup."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agentxmap.core.config import Settings
from agentxmap.core.exceptions import IdentityError, UserAlreadyExists
from agentxmap.core.structured_logging import log_json
from agentxmap.models.user import User
from agentxmap.services.identity_service import IdentityService

logger = logging.getLogger(__name__)


async def ensure_initial_admin(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> User | None:
    """Sign up the configured initial admin if it does not exist yet.

    Does nothing unless both INITIAL_ADMIN_EMAIL and INITIAL_ADMIN_PASSWORD
    are set. Failures are logged and never stop the application.

    Returns:
        The created admin, or None if nothing was created
    """
    if not settings.initial_admin_email or not settings.initial_admin_password:
        return None

    async with session_factory() as session:
        service = IdentityService(session, settings=settings, logger=logger)
        try:
            user = await service.sign_up(
                settings.initial_admin_organization,
                settings.initial_admin_email,
                settings.initial_admin_password,
            )
        except UserAlreadyExists:
            log_json(logger, logging.INFO, "initial_admin_exists")
            return None
        except IdentityError as exc:
            await session.rollback()
            log_json(
                logger,
                logging.ERROR,
                "initial_admin_failed",
                error=exc.code,
                message=exc.message,
            )
            return None
        except SQLAlchemyError as exc:
            await session.rollback()
            log_json(
                logger,
                logging.ERROR,
                "initial_admin_failed",
                error="database_error",
                exception=exc.__class__.__name__,
            )
            return None

    log_json(logger, logging.INFO, "initial_admin_created", user_id=user.id)
    return user
