#!/usr/bin/env python
"""Create a company super-admin principal."""

import asyncio
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import select

from hrms_api.database import async_session_maker
from hrms_api.models.orm.company import CompanyORM
from hrms_api.models.orm.principal import PrincipalORM
from hrms_api.repositories.principal_repository import PrincipalRepository
from hrms_api.repositories.role_repository import RoleRepository
from hrms_api.services.permission_sync_service import PermissionSyncService


async def create_superadmin(
    company: str,
    email: str,
    name: str,
    platform: bool = False,
) -> bool:
    """Create a super-admin principal, and its company if needed."""
    async with async_session_maker() as session:
        # Make sure the catalog and the predefined roles exist
        await PermissionSyncService(session).sync()

        principal_repo = PrincipalRepository(session)
        role = await RoleRepository(session).get_global_by_code("superadmin")
        if role is None:
            print("Superadmin role not found after sync")
            return False

        result = await session.execute(
            select(PrincipalORM).where(PrincipalORM.email == email.lower())
        )
        if result.scalar_one_or_none() is not None:
            print(f"Principal {email} already exists")
            return False

        result = await session.execute(select(CompanyORM).where(CompanyORM.name == company))
        tenant = result.scalar_one_or_none()
        if tenant is None:
            tenant = CompanyORM(name=company)
            session.add(tenant)
            await session.flush()

        principal = await principal_repo.create(
            tenant_id=tenant.id,
            email=email.lower(),
            full_name=name,
            is_platform_admin=platform,
            permission_overrides=[],
        )
        await principal_repo.add_role(principal.id, role.id)

        await session.commit()
        print(f"Super-admin created: {email} ({company})")
        return True


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create a super-admin principal")
    parser.add_argument("--company", required=True, help="Company name")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--name", required=True, help="Full name")
    parser.add_argument(
        "--platform",
        action="store_true",
        help="Grant platform operator status (exempt from tenant isolation)",
    )
    args = parser.parse_args()

    ok = asyncio.run(create_superadmin(args.company, args.email, args.name, args.platform))
    sys.exit(0 if ok else 1)
