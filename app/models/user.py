"""
models/user.py
--------------
User ORM model with role and organization binding.

Role design:
  - 'Admin':  Organization administrator.
  - 'Member': Regular member (default).

Emails are stored trimmed and lower-cased; the UNIQUE constraint on the
column is the backstop for the service-level duplicate check.
"""

from enum import Enum as PyEnum

from sqlalchemy import Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, CreatedAtMixin


class UserRole(str, PyEnum):
    admin = "Admin"
    member = "Member"


class User(Base, CreatedAtMixin):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            values_callable=lambda roles: [r.value for r in roles],
            validate_strings=True,
        ),
        nullable=False,
        default=UserRole.member,
        index=True,
    )
    org_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(
            "organizations.org_id", ondelete="RESTRICT", onupdate="CASCADE"
        ),
        nullable=False,
        index=True,
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(  # noqa: F821
        "Organization", back_populates="users"
    )

    def __repr__(self) -> str:
        return f"<User user_id={self.user_id} email={self.email} role={self.role}>"
