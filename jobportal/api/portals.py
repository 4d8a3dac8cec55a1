"""Portal API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from jobportal.api.dependencies import get_current_claims, get_portal_store
from jobportal.schemas.auth import TokenClaims
from jobportal.schemas.portal import (
    MessageResponse,
    PortalCreate,
    PortalCreated,
    PortalResponse,
    PortalUpdate,
)
from jobportal.services.portal_store import PortalStore

router = APIRouter(tags=["portals"])


@router.post("/portals", response_model=PortalCreated, status_code=status.HTTP_201_CREATED)
def create_portal(
    portal_data: PortalCreate,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[PortalStore, Depends(get_portal_store)],
):
    """Save a new portal."""
    portal_id = store.create(claims.user_id, portal_data.category, portal_data.link)
    return PortalCreated(message="Portal created successfully", portal_id=portal_id)


@router.get("/portals", response_model=list[PortalResponse])
def get_portals(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[PortalStore, Depends(get_portal_store)],
):
    """Get all of the user's portals, grouped by category."""
    return store.list_portals(claims.user_id)


@router.get("/portals/{portal_id:int}", response_model=PortalResponse)
def get_portal(
    portal_id: int,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[PortalStore, Depends(get_portal_store)],
):
    """Get a single portal."""
    return store.get(claims.user_id, portal_id)


@router.put("/portals/{portal_id:int}", response_model=MessageResponse)
def update_portal(
    portal_id: int,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[PortalStore, Depends(get_portal_store)],
    portal_data: PortalUpdate | None = None,
):
    """Update a portal's category and/or link."""
    # A missing body is an empty patch
    portal_data = portal_data or PortalUpdate()
    store.update(claims.user_id, portal_id, portal_data.category, portal_data.link)
    return MessageResponse(message="Portal updated successfully")


@router.delete("/portals/{portal_id:int}", response_model=MessageResponse)
def delete_portal(
    portal_id: int,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[PortalStore, Depends(get_portal_store)],
):
    """Delete a portal."""
    store.delete(claims.user_id, portal_id)
    return MessageResponse(message="Portal deleted successfully")


@router.get("/categories", response_model=list[str])
def get_categories(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[PortalStore, Depends(get_portal_store)],
):
    """Get the distinct categories of the user's portals."""
    return store.distinct_categories(claims.user_id)
