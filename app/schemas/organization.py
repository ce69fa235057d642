"""
schemas/organization.py
-----------------------
Pydantic request/response models for Organization.

Naming convention:
  OrganizationCreate  → inbound request body (POST and PUT share it)
  OrganizationRead    → outbound record without nested users
  OrganizationDetail  → outbound record with its users (list / get)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from app.models.user import UserRole

NAME_MAX_LENGTH = 255


class OrganizationCreate(BaseModel):
    name: Optional[str] = Field(
        default=None,
        validate_default=True,
        examples=["Acme"],
        description="Display name, 1-255 characters",
    )
    address: Optional[str] = Field(
        default=None,
        validate_default=True,
        examples=["1 Main St"],
    )

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> str:
        v = (v or "").strip()
        if not v:
            raise PydanticCustomError("required", "Organization name is required")
        if len(v) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "length",
                "Organization name must be between 1 and 255 characters",
            )
        return v

    @field_validator("address")
    @classmethod
    def check_address(cls, v: Optional[str]) -> str:
        v = (v or "").strip()
        if not v:
            raise PydanticCustomError("required", "Organization address is required")
        return v


class OrganizationUpdate(OrganizationCreate):
    """PUT replaces both mutable fields, so the rules are identical."""


class OrganizationUserRead(BaseModel):
    user_id: int
    name: str
    email: str
    role: UserRole

    model_config = {"from_attributes": True}


class OrganizationRead(BaseModel):
    org_id: int
    name: str
    address: str
    created_at: datetime

    model_config = {"from_attributes": True}


class OrganizationDetail(OrganizationRead):
    users: list[OrganizationUserRead] = []
