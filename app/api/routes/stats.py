"""
api/routes/stats.py
-------------------
GET /stats — Dashboard totals (organizations, users per role, recent activity).
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.base import Envelope
from app.schemas.stats import DashboardStats
from app.services.stats_service import StatsService

router = APIRouter(tags=["Dashboard"])


@router.get(
    "/stats",
    response_model=Envelope[DashboardStats],
    response_model_exclude_none=True,
    summary="Dashboard summary counts",
)
async def dashboard_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[DashboardStats]:
    return Envelope(data=await StatsService.summary(db))
