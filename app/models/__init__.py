"""
models/__init__.py
------------------
Re-export all models so create_tables.py and the test suite can import Base
and discover all tables via a single import:

    from app.models import Base
"""

from app.db.base import Base
from app.models.organization import Organization
from app.models.user import User, UserRole

__all__ = ["Base", "Organization", "User", "UserRole"]
