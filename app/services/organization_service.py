"""
services/organization_service.py
--------------------------------
Business logic for organization management.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (no delete while users reference the org)
  - Returning domain objects (ORM models) to the route layer
  - Raising domain errors, never HTTP responses (that's the route's job)
"""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import Conflict, NotFound, translate_store_errors
from app.core.logging import get_logger
from app.db.base import key_in_range
from app.models.organization import Organization
from app.models.user import User
from app.schemas.organization import OrganizationCreate, OrganizationUpdate

logger = get_logger(__name__)

ORGANIZATION_NOT_FOUND = "Organization not found"
ORGANIZATION_HAS_USERS = (
    "Cannot delete organization with existing users. Please delete users first."
)


class OrganizationService:

    @staticmethod
    async def _user_count(db: AsyncSession, org_id: int) -> int:
        result = await db.execute(
            select(func.count()).select_from(User).where(User.org_id == org_id)
        )
        return result.scalar_one()

    @staticmethod
    @translate_store_errors("Failed to fetch organizations")
    async def list_organizations(db: AsyncSession) -> list[Organization]:
        """All organizations with their users, newest first."""
        result = await db.execute(
            select(Organization)
            .options(selectinload(Organization.users))
            .order_by(Organization.created_at.desc(), Organization.org_id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    @staticmethod
    @translate_store_errors("Failed to fetch organization")
    async def get_organization(db: AsyncSession, org_id: int) -> Organization:
        """
        Load one organization with its users.
        Raises NotFound if the id does not exist.
        """
        if not key_in_range(org_id):
            raise NotFound(ORGANIZATION_NOT_FOUND)
        result = await db.execute(
            select(Organization)
            .where(Organization.org_id == org_id)
            .options(selectinload(Organization.users))
            .execution_options(populate_existing=True)
        )
        organization = result.scalar_one_or_none()
        if organization is None:
            raise NotFound(ORGANIZATION_NOT_FOUND)
        return organization

    @staticmethod
    @translate_store_errors("Failed to create organization")
    async def create_organization(
        db: AsyncSession, data: OrganizationCreate
    ) -> Organization:
        organization = Organization(name=data.name, address=data.address)
        db.add(organization)
        await db.flush()
        await db.commit()
        await db.refresh(organization)  # Load server-side created_at
        logger.info(
            "Organization created",
            org_id=organization.org_id,
            name=organization.name,
        )
        return organization

    @staticmethod
    @translate_store_errors("Failed to update organization")
    async def update_organization(
        db: AsyncSession, org_id: int, data: OrganizationUpdate
    ) -> Organization:
        """
        Overwrite name and address in place.
        org_id and created_at are never touched.
        """
        if not key_in_range(org_id):
            raise NotFound(ORGANIZATION_NOT_FOUND)
        organization = await db.get(Organization, org_id)
        if organization is None:
            raise NotFound(ORGANIZATION_NOT_FOUND)

        organization.name = data.name
        organization.address = data.address
        await db.commit()
        await db.refresh(organization)
        logger.info("Organization updated", org_id=org_id)
        return organization

    @staticmethod
    @translate_store_errors("Failed to delete organization")
    async def delete_organization(db: AsyncSession, org_id: int) -> None:
        """
        Delete an organization that has no users.

        The row is locked FOR UPDATE before counting users so a concurrent
        create/reassign targeting this org waits for the outcome. The RESTRICT
        foreign key rejects the delete if a user still slips in.
        """
        if not key_in_range(org_id):
            raise NotFound(ORGANIZATION_NOT_FOUND)

        result = await db.execute(
            select(Organization)
            .where(Organization.org_id == org_id)
            .with_for_update()
        )
        organization = result.scalar_one_or_none()
        if organization is None:
            raise NotFound(ORGANIZATION_NOT_FOUND)

        user_count = await OrganizationService._user_count(db, org_id)
        if user_count > 0:
            await db.rollback()  # Release the row lock
            logger.info(
                "Organization delete refused", org_id=org_id, user_count=user_count
            )
            raise Conflict(ORGANIZATION_HAS_USERS)

        await db.delete(organization)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning("Organization delete hit FK restriction", org_id=org_id)
            raise Conflict(ORGANIZATION_HAS_USERS)
        logger.info("Organization deleted", org_id=org_id)
