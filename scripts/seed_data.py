"""Seed script for development data.

Creates:
- Organization "agentXmap Dev" with admin "admin@agentxmap.local"
  (password provided via env)
- A pending invitation for "member@agentxmap.local"

Can be run multiple times safely (skips what exists).
"""
import asyncio
import os

from agentxmap.core.database import AsyncSessionLocal
from agentxmap.core.exceptions import IdentityError, UserAlreadyExists
from agentxmap.models.enums import UserRole
from agentxmap.repositories import UserRepository
from agentxmap.services.identity_service import IdentityService, InviteOutcomeStatus


async def seed_data():
    """Seed development data."""
    print("Starting database seeding...")

    org_name = os.environ.get("SEED_ORG_NAME", "agentXmap Dev")
    admin_email = os.environ.get("SEED_ADMIN_EMAIL", "admin@agentxmap.local")
    member_email = os.environ.get("SEED_MEMBER_EMAIL", "member@agentxmap.local")
    admin_password = os.environ.get("SEED_ADMIN_PASSWORD")
    if not admin_password:
        print("✗ Missing SEED_ADMIN_PASSWORD environment variable")
        print("  Example: SEED_ADMIN_PASSWORD='YourStrongPassword123!' python scripts/seed_data.py")
        return

    async with AsyncSessionLocal() as db:
        service = IdentityService(db)

        try:
            admin = await service.sign_up(org_name, admin_email, admin_password)
            print(f"✓ Created organization '{org_name}' (ID: {admin.org_id})")
            print(f"✓ Created admin user '{admin_email}' (ID: {admin.id})")
        except UserAlreadyExists:
            admin = await UserRepository(db).get_by_email(admin_email)
            print(f"✓ Admin user '{admin_email}' already exists (ID: {admin.id})")
        except IdentityError as e:
            print(f"✗ Sign-up failed: {e.message}")
            return

        outcomes = await service.invite_users_detailed(admin.id, [member_email], UserRole.USER)
        for outcome in outcomes:
            if outcome.status is InviteOutcomeStatus.INVITED:
                print(f"✓ Invited '{outcome.email}' (token: {outcome.invitation.token})")
            else:
                print(f"✓ User '{outcome.email}' already exists, not invited")

    print("\nDatabase seeding complete!")
    print(f"  Login: {admin_email}")


if __name__ == "__main__":
    asyncio.run(seed_data())
