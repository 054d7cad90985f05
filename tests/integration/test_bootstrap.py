"""Tests for creating the initial admin at startup."""

import logging

import pytest
from sqlalchemy import func, select

from agentxmap.core.config import Settings, get_settings
from agentxmap.models.user import User
from agentxmap.services.bootstrap import ensure_initial_admin


def bootstrap_settings(**overrides) -> Settings:
    return get_settings().model_copy(update=overrides)


@pytest.mark.asyncio
class TestEnsureInitialAdmin:
    async def test_not_configured_does_nothing(self, session_factory):
        settings = bootstrap_settings(initial_admin_email=None, initial_admin_password=None)

        assert await ensure_initial_admin(session_factory, settings) is None

        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(User)) == 0

    async def test_creates_admin_once(self, session_factory):
        settings = bootstrap_settings(
            initial_admin_email="root@example.org",
            initial_admin_password="bootstrap-pw",
            initial_admin_organization="Platform",
        )

        created = await ensure_initial_admin(session_factory, settings)
        assert created is not None
        assert created.email == "root@example.org"
        assert created.organization.slug == "platform"

        assert await ensure_initial_admin(session_factory, settings) is None

        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(User)) == 1

    async def test_invalid_configuration_is_logged_not_raised(self, session_factory, caplog):
        caplog.set_level(logging.INFO, logger="agentxmap.services.bootstrap")
        settings = bootstrap_settings(
            initial_admin_email="root@example.org",
            initial_admin_password="bootstrap-pw",
            initial_admin_organization="***",
        )

        assert await ensure_initial_admin(session_factory, settings) is None
        assert "initial_admin_failed" in caplog.text
