"""
api/routes/organizations.py
---------------------------
Organization CRUD endpoints.

GET    /organizations        — List organizations with their users
GET    /organizations/{id}   — One organization with its users
POST   /organizations        — Create an organization
PUT    /organizations/{id}   — Replace name and address
DELETE /organizations/{id}   — Delete (refused while users remain)

Failures are raised by the service layer as domain errors and rendered by
the global handlers in main.py.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.base import Envelope, MessageResponse
from app.schemas.organization import (
    OrganizationCreate,
    OrganizationDetail,
    OrganizationRead,
    OrganizationUpdate,
)
from app.services.organization_service import OrganizationService

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.get(
    "",
    response_model=Envelope[list[OrganizationDetail]],
    response_model_exclude_none=True,
    summary="List all organizations (newest first)",
)
async def list_organizations(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[list[OrganizationDetail]]:
    organizations = await OrganizationService.list_organizations(db)
    return Envelope(
        data=[OrganizationDetail.model_validate(o) for o in organizations]
    )


@router.get(
    "/{org_id}",
    response_model=Envelope[OrganizationDetail],
    response_model_exclude_none=True,
    summary="Get an organization and its users",
)
async def get_organization(
    org_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[OrganizationDetail]:
    organization = await OrganizationService.get_organization(db, org_id)
    return Envelope(data=OrganizationDetail.model_validate(organization))


@router.post(
    "",
    response_model=Envelope[OrganizationRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create an organization",
)
async def create_organization(
    body: OrganizationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[OrganizationRead]:
    organization = await OrganizationService.create_organization(db, body)
    return Envelope(
        message="Organization created successfully",
        data=OrganizationRead.model_validate(organization),
    )


@router.put(
    "/{org_id}",
    response_model=Envelope[OrganizationRead],
    response_model_exclude_none=True,
    summary="Update an organization's name and address",
)
async def update_organization(
    org_id: int,
    body: OrganizationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Envelope[OrganizationRead]:
    organization = await OrganizationService.update_organization(db, org_id, body)
    return Envelope(
        message="Organization updated successfully",
        data=OrganizationRead.model_validate(organization),
    )


@router.delete(
    "/{org_id}",
    response_model=MessageResponse,
    summary="Delete an organization that has no users",
)
async def delete_organization(
    org_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Returns 400 while any user still belongs to the organization."""
    await OrganizationService.delete_organization(db, org_id)
    return MessageResponse(message="Organization deleted successfully")
