"""
services/user_service.py
------------------------
Business logic for user management.

Write paths check, in order:
  1. the target user exists (update only)
  2. org_id resolves to an existing organization  → ValidationFailed (400)
  3. the email is not held by another user         → Conflict (400)
The UNIQUE(email) and FK constraints back these checks up if a concurrent
request wins the race.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import Conflict, NotFound, ValidationFailed, translate_store_errors
from app.core.logging import get_logger
from app.db.base import key_in_range
from app.models.organization import Organization
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = get_logger(__name__)

USER_NOT_FOUND = "User not found"
ORGANIZATION_NOT_FOUND = "Organization not found"
EMAIL_TAKEN = "Email already exists"


def _org_not_found() -> ValidationFailed:
    return ValidationFailed(
        ORGANIZATION_NOT_FOUND,
        errors=[{"field": "org_id", "message": ORGANIZATION_NOT_FOUND}],
    )


def _email_taken() -> Conflict:
    return Conflict(EMAIL_TAKEN, errors=[{"field": "email", "message": EMAIL_TAKEN}])


class UserService:

    @staticmethod
    async def _load(db: AsyncSession, user_id: int) -> Optional[User]:
        if not key_in_range(user_id):
            return None
        result = await db.execute(
            select(User)
            .where(User.user_id == user_id)
            .options(selectinload(User.organization))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _require_organization(db: AsyncSession, org_id: int) -> None:
        if not key_in_range(org_id):
            raise _org_not_found()
        # FOR SHARE: blocks a concurrent organization delete until we commit
        result = await db.execute(
            select(Organization.org_id)
            .where(Organization.org_id == org_id)
            .with_for_update(read=True)
        )
        if result.scalar_one_or_none() is None:
            raise _org_not_found()

    @staticmethod
    async def _email_in_use(
        db: AsyncSession, email: str, exclude_user_id: Optional[int] = None
    ) -> bool:
        stmt = select(User.user_id).where(User.email == email)
        if exclude_user_id is not None:
            stmt = stmt.where(User.user_id != exclude_user_id)
        result = await db.execute(stmt.limit(1))
        return result.first() is not None

    @staticmethod
    async def _commit_user_write(
        db: AsyncSession, email: str, exclude_user_id: Optional[int] = None
    ) -> None:
        """Commit, mapping a constraint violation back to the matching domain error."""
        try:
            await db.flush()
            await db.commit()
        except IntegrityError:
            await db.rollback()
            if await UserService._email_in_use(db, email, exclude_user_id):
                raise _email_taken()
            raise _org_not_found()

    @staticmethod
    @translate_store_errors("Failed to fetch users")
    async def list_users(db: AsyncSession) -> list[User]:
        """All users with their organization summary, newest first."""
        result = await db.execute(
            select(User)
            .options(selectinload(User.organization))
            .order_by(User.created_at.desc(), User.user_id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    @staticmethod
    @translate_store_errors("Failed to fetch users")
    async def list_users_by_organization(
        db: AsyncSession, org_id: int
    ) -> list[User]:
        """
        Users of one organization, newest first.
        An unknown org_id simply yields an empty list.
        """
        if not key_in_range(org_id):
            return []
        result = await db.execute(
            select(User)
            .where(User.org_id == org_id)
            .options(selectinload(User.organization))
            .order_by(User.created_at.desc(), User.user_id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    @staticmethod
    @translate_store_errors("Failed to fetch user")
    async def get_user(db: AsyncSession, user_id: int) -> User:
        user = await UserService._load(db, user_id)
        if user is None:
            raise NotFound(USER_NOT_FOUND)
        return user

    @staticmethod
    @translate_store_errors("Failed to create user")
    async def create_user(db: AsyncSession, data: UserCreate) -> User:
        await UserService._require_organization(db, data.org_id)
        if await UserService._email_in_use(db, data.email):
            raise _email_taken()

        user = User(
            name=data.name,
            email=data.email,
            role=data.role,
            org_id=data.org_id,
        )
        db.add(user)
        await UserService._commit_user_write(db, data.email)
        logger.info(
            "User created",
            user_id=user.user_id,
            org_id=user.org_id,
            role=user.role.value,
        )
        return await UserService._load(db, user.user_id)

    @staticmethod
    @translate_store_errors("Failed to update user")
    async def update_user(db: AsyncSession, user_id: int, data: UserUpdate) -> User:
        """
        Full-record update. Keeping one's own email is allowed; taking
        another user's email is a Conflict.
        """
        user = await db.get(User, user_id) if key_in_range(user_id) else None
        if user is None:
            raise NotFound(USER_NOT_FOUND)

        await UserService._require_organization(db, data.org_id)
        if await UserService._email_in_use(db, data.email, exclude_user_id=user_id):
            raise _email_taken()

        user.name = data.name
        user.email = data.email
        user.role = data.role
        user.org_id = data.org_id
        await UserService._commit_user_write(db, data.email, exclude_user_id=user_id)
        logger.info("User updated", user_id=user_id, org_id=data.org_id)
        return await UserService._load(db, user_id)

    @staticmethod
    @translate_store_errors("Failed to delete user")
    async def delete_user(db: AsyncSession, user_id: int) -> None:
        user = await db.get(User, user_id) if key_in_range(user_id) else None
        if user is None:
            raise NotFound(USER_NOT_FOUND)

        await db.delete(user)
        await db.commit()
        logger.info("User deleted", user_id=user_id)
