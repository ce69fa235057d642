"""
models/organization.py
----------------------
Organization ORM model.

An organization owns zero or more users through users.org_id. There is no
ORM-level cascade: the foreign key is RESTRICT on delete, and the service
refuses to delete an organization that still has users.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, CreatedAtMixin


class Organization(Base, CreatedAtMixin):
    __tablename__ = "organizations"

    org_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    users: Mapped[list["User"]] = relationship(  # noqa: F821
        "User",
        back_populates="organization",
        passive_deletes="all",
        order_by="User.user_id",
    )

    def __repr__(self) -> str:
        return f"<Organization org_id={self.org_id} name={self.name}>"
