"""Request correlation ID propagated into structured logs."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Return the correlation ID of the current request, if any."""

    return _request_id_var.get()


def new_request_id() -> str:
    """Generate a new correlation ID."""

    return uuid4().hex


@contextmanager
def request_id_context(request_id: str | None) -> Iterator[None]:
    """Bind ``request_id`` to the current context for the duration."""

    token = _request_id_var.set(request_id)
    try:
        yield
    finally:
        _request_id_var.reset(token)
