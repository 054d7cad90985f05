"""Structured JSON logging for identity events.

Every log line is a single JSON document carrying the event name, a UTC
timestamp and, inside a request, the request ID. Fields that name a
credential are replaced before serialization so a careless call site cannot
leak passwords, password hashes or invitation tokens.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from agentxmap.core.request_context import get_request_id

REDACTED = "[REDACTED]"

SENSITIVE_FIELDS = frozenset({"password", "password_hash", "token", "invitation_token"})


def _redact(fields: dict[str, Any]) -> dict[str, Any]:
    return {
        key: REDACTED if key.lower() in SENSITIVE_FIELDS else value
        for key, value in fields.items()
    }


def log_json(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """Emit one JSON log line for ``event``.

    Args:
        logger: Destination logger
        level: Logging level
        event: Stable event name, e.g. ``invitation_accepted``
        **fields: Extra context; credential fields are redacted
    """
    if not logger.isEnabledFor(level):
        return

    payload: dict[str, Any] = {
        "event": event,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    request_id = get_request_id()
    if request_id:
        payload["request_id"] = request_id

    payload.update(_redact(fields))
    logger.log(level, json.dumps(payload, default=str))


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the application process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s %(name)s %(message)s",
    )
