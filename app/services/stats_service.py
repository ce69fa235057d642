"""
services/stats_service.py
-------------------------
Headline counts for the admin console dashboard.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import translate_store_errors
from app.models.organization import Organization
from app.models.user import User, UserRole
from app.schemas.stats import DashboardStats


class StatsService:

    @staticmethod
    @translate_store_errors("Failed to load dashboard stats")
    async def summary(
        db: AsyncSession, now: Optional[datetime] = None
    ) -> DashboardStats:
        """
        Organization/user totals, users per role, and the number of
        organizations created within the last RECENT_ACTIVITY_DAYS days.
        """
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=settings.RECENT_ACTIVITY_DAYS)

        total_organizations = (
            await db.execute(select(func.count()).select_from(Organization))
        ).scalar_one()
        recent_organizations = (
            await db.execute(
                select(func.count())
                .select_from(Organization)
                .where(Organization.created_at > since)
            )
        ).scalar_one()

        role_rows = await db.execute(
            select(User.role, func.count()).group_by(User.role)
        )
        per_role = {role: count for role, count in role_rows.all()}

        return DashboardStats(
            total_organizations=total_organizations,
            total_users=sum(per_role.values()),
            admin_users=per_role.get(UserRole.admin, 0),
            member_users=per_role.get(UserRole.member, 0),
            recent_organizations=recent_organizations,
        )
