"""
schemas/user.py
---------------
Pydantic models for User requests and responses.

Validation mirrors the admin console's form rules:
  - name:   1-255 characters after trimming
  - email:  valid shape, stored trimmed + lower-cased
  - role:   'Admin' | 'Member' (defaults to 'Member' when omitted)
  - org_id: positive integer within the key column range; numeric strings
            from form posts are accepted
"""

from datetime import datetime
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from app.db.base import MAX_KEY
from app.models.user import UserRole

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255


class UserCreate(BaseModel):
    name: Optional[str] = Field(default=None, validate_default=True, examples=["Jo"])
    email: Optional[str] = Field(
        default=None, validate_default=True, examples=["jo@acme.com"]
    )
    role: UserRole = UserRole.member
    org_id: Optional[int] = Field(
        default=None,
        validate_default=True,
        description="Id of an existing organization",
    )

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> str:
        v = (v or "").strip()
        if not v:
            raise PydanticCustomError("required", "User name is required")
        if len(v) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "length", "User name must be between 1 and 255 characters"
            )
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Optional[str]) -> str:
        v = (v or "").strip().lower()
        try:
            info = validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email", "Please provide a valid email address")
        normalised = info.normalized.lower()
        if len(normalised) > EMAIL_MAX_LENGTH:
            raise PydanticCustomError(
                "length", "Email must be at most 255 characters"
            )
        return normalised

    @field_validator("role", mode="before")
    @classmethod
    def check_role(cls, v: Any) -> UserRole:
        if isinstance(v, UserRole):
            return v
        if isinstance(v, str) and v in {r.value for r in UserRole}:
            return UserRole(v)
        raise PydanticCustomError("role", "Role must be either Admin or Member")

    @field_validator("org_id", mode="before")
    @classmethod
    def check_org_id(cls, v: Any) -> int:
        if isinstance(v, str) and v.strip().isdigit():
            v = int(v.strip())
        elif isinstance(v, float) and v.is_integer():
            v = int(v)
        # bool is an int subclass
        if isinstance(v, bool) or not isinstance(v, int) or not 1 <= v <= MAX_KEY:
            raise PydanticCustomError(
                "org_id", "Valid organization ID is required"
            )
        return v


class UserUpdate(UserCreate):
    """PUT is a full-record update; every field is re-validated."""


class UserOrganizationRead(BaseModel):
    org_id: int
    name: str

    model_config = {"from_attributes": True}


class UserRead(BaseModel):
    user_id: int
    name: str
    email: str
    role: UserRole
    org_id: int
    created_at: datetime
    organization: Optional[UserOrganizationRead] = None

    model_config = {"from_attributes": True}
