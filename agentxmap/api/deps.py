"""FastAPI dependencies for the identity endpoints."""
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from agentxmap.core.config import get_settings
from agentxmap.core.database import get_db
from agentxmap.services.identity_service import IdentityService


async def get_identity_service(db: AsyncSession = Depends(get_db)) -> IdentityService:
    """Build an identity service bound to the request's database session."""
    return IdentityService(db, settings=get_settings())


async def get_admin_id(x_admin_id: str | None = Header(default=None)) -> UUID:
    """Resolve the acting user from the X-Admin-ID header.

    Stands in for authentication middleware until signed sessions exist.

    Raises:
        HTTPException: 401 if the header is missing or not a UUID
    """
    if not x_admin_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-Admin-ID header"
        )
    try:
        return UUID(x_admin_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid X-Admin-ID header"
        ) from None
