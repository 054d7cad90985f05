"""Password hashing and invitation token generation."""

import secrets

import bcrypt

from agentxmap.core.config import get_settings
from agentxmap.core.exceptions import EncodingError, EntropyError

settings = get_settings()

# bcrypt only considers the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

# 32 bytes = 256 bits of entropy, hex encoded to 64 characters
INVITATION_TOKEN_BYTES = 32


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor (defaults to settings.bcrypt_rounds)

    Returns:
        Hashed password string

    Raises:
        EncodingError: If the salt could not be generated
    """
    password_bytes = password.encode("utf-8")
    try:
        salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    except (OSError, NotImplementedError) as exc:
        raise EncodingError() from exc
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash.

    Malformed or missing hashes never raise; they simply do not match.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Hashed password to verify against

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    password_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        return False


def generate_invitation_token() -> str:
    """Generate an unguessable invitation token.

    Returns:
        64 character hex string

    Raises:
        EntropyError: If the operating system random source is unavailable
    """
    try:
        return secrets.token_hex(INVITATION_TOKEN_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise EntropyError() from exc
