"""
schemas/stats.py
----------------
Dashboard summary payload.
"""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_organizations: int
    total_users: int
    admin_users: int
    member_users: int
    recent_organizations: int
