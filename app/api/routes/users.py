"""
api/routes/users.py
-------------------
User CRUD endpoints.

GET    /users                          — List users with organization summary
GET    /users/organization/{org_id}    — Users of one organization
GET    /users/{id}                     — One user
POST   /users                          — Create a user
PUT    /users/{id}                     — Full-record update
DELETE /users/{id}                     — Delete a user
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.base import Envelope, MessageResponse
from app.schemas.user import UserCreate, UserRead, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=Envelope[list[UserRead]],
    response_model_exclude_none=True,
    summary="List all users (newest first)",
)
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[list[UserRead]]:
    users = await UserService.list_users(db)
    return Envelope(data=[UserRead.model_validate(u) for u in users])


# Registered before /{user_id} so "organization" is never parsed as an id
@router.get(
    "/organization/{org_id}",
    response_model=Envelope[list[UserRead]],
    response_model_exclude_none=True,
    summary="List the users of one organization",
)
async def list_users_by_organization(
    org_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[list[UserRead]]:
    users = await UserService.list_users_by_organization(db, org_id)
    return Envelope(data=[UserRead.model_validate(u) for u in users])


@router.get(
    "/{user_id}",
    response_model=Envelope[UserRead],
    response_model_exclude_none=True,
    summary="Get a user",
)
async def get_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[UserRead]:
    user = await UserService.get_user(db, user_id)
    return Envelope(data=UserRead.model_validate(user))


@router.post(
    "",
    response_model=Envelope[UserRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user in an existing organization",
)
async def create_user(
    body: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[UserRead]:
    """
    An unknown org_id and a duplicate email are both reported as 400:
    org_id is caller input, not the addressed resource.
    """
    user = await UserService.create_user(db, body)
    return Envelope(
        message="User created successfully",
        data=UserRead.model_validate(user),
    )


@router.put(
    "/{user_id}",
    response_model=Envelope[UserRead],
    response_model_exclude_none=True,
    summary="Update a user",
)
async def update_user(
    user_id: int,
    body: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[UserRead]:
    user = await UserService.update_user(db, user_id, body)
    return Envelope(
        message="User updated successfully",
        data=UserRead.model_validate(user),
    )


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
)
async def delete_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    await UserService.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")
