"""
create_tables.py
----------------
One-shot script to create all database tables and, optionally, load the
sample data set used by the admin console demo.

Sample data is only inserted into an empty database; otherwise the
current row counts are reported.

Usage:
    python create_tables.py
    python create_tables.py --seed
"""

import argparse
import asyncio

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.models import Base, Organization, User  # Imports all models so metadata is populated
from app.schemas.organization import OrganizationCreate
from app.schemas.user import UserCreate
from app.services.organization_service import OrganizationService
from app.services.user_service import UserService

SAMPLE_DATA = [
    (
        "Tech Solutions Inc.",
        "123 Tech Street, Silicon Valley, CA 94000",
        [
            ("John Smith", "john.smith@techsolutions.com", "Admin"),
            ("Sarah Johnson", "sarah.johnson@techsolutions.com", "Member"),
        ],
    ),
    (
        "Digital Innovations Ltd.",
        "456 Innovation Drive, Austin, TX 78701",
        [
            ("Mike Davis", "mike.davis@digitalinnovations.com", "Admin"),
            ("Emily Brown", "emily.brown@digitalinnovations.com", "Member"),
        ],
    ),
    (
        "Future Systems Corp.",
        "789 Future Avenue, Seattle, WA 98101",
        [
            ("David Wilson", "david.wilson@futuresystems.com", "Admin"),
            ("Lisa Anderson", "lisa.anderson@futuresystems.com", "Member"),
        ],
    ),
]


async def seed_sample_data(db: AsyncSession) -> bool:
    """Insert SAMPLE_DATA through the service layer. Returns False if data exists."""
    org_count = (await db.execute(select(func.count()).select_from(Organization))).scalar_one()
    user_count = (await db.execute(select(func.count()).select_from(User))).scalar_one()
    if org_count or user_count:
        print(f"Database already contains {org_count} organizations and {user_count} users.")
        return False

    for org_name, address, members in SAMPLE_DATA:
        organization = await OrganizationService.create_organization(
            db, OrganizationCreate(name=org_name, address=address)
        )
        for name, email, role in members:
            await UserService.create_user(
                db,
                UserCreate(name=name, email=email, role=role, org_id=organization.org_id),
            )
    return True


async def create_all_tables(seed: bool = False) -> None:
    engine = create_async_engine(settings.DATABASE_URL, echo=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("✅  All tables created successfully.")

    if seed:
        session_factory = async_sessionmaker(engine, expire_on_commit=False)
        async with session_factory() as db:
            if await seed_sample_data(db):
                print("✅  Sample data created successfully.")
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create tables for the admin API")
    parser.add_argument("--seed", action="store_true", help="Insert sample data into an empty database")
    args = parser.parse_args()
    asyncio.run(create_all_tables(seed=args.seed))
