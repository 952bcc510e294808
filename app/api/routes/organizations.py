from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.context import RequestContext
from app.core.deps import get_request_context
from app.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from app.database import get_db
from app.db.store import EntityStore
from app.db.unit_of_work import atomic
from app.models.organization import Organization
from app.models.user import User
from app.schemas.organization import OrganizationCreate, OrganizationUpdate, OrganizationResponse

router = APIRouter()


def _require_own(ctx: RequestContext, store: EntityStore, organization_id: UUID) -> Organization:
    organization = store.require(Organization, organization_id, label="Organization")
    if not ctx.is_system and ctx.organization_id != organization.id:
        raise AuthorizationError(f"Organization {organization_id} is not yours")
    return organization


@router.get("/", response_model=List[OrganizationResponse])
def list_organizations(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Organizations visible to the current user"""
    store = EntityStore(db)
    if ctx.is_system:
        return store.list(Organization, order_by=Organization.name)
    if ctx.organization_id is None:
        return []
    return [store.require(Organization, ctx.organization_id, label="Organization")]


@router.get("/verify/{code}", response_model=OrganizationResponse)
def get_organization_by_code(code: str, db: Session = Depends(get_db)):
    """Look up an organization by the verification code staff sign up with"""
    matches = EntityStore(db).list(Organization, verification_code=code)
    if not matches:
        raise NotFoundError(f"Organization not found for code: {code}")
    return matches[0]


@router.post("/", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
def create_organization(
    organization_in: OrganizationCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    store = EntityStore(db)
    with atomic(db, "create organization"):
        organization = store.save(Organization(**organization_in.model_dump()))
        # A user without an organization becomes a member of the one they create
        if ctx.user_id is not None and ctx.organization_id is None:
            user = store.require(User, ctx.user_id, label="User")
            user.organization_id = organization.id
            store.save(user)
    return organization


@router.get("/{organization_id}", response_model=OrganizationResponse)
def get_organization(
    organization_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return _require_own(ctx, EntityStore(db), organization_id)


@router.put("/{organization_id}", response_model=OrganizationResponse)
def update_organization(
    organization_id: UUID,
    organization_update: OrganizationUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    store = EntityStore(db)
    with atomic(db, "update organization"):
        organization = _require_own(ctx, store, organization_id)
        for key, value in organization_update.model_dump(exclude_unset=True).items():
            setattr(organization, key, value)
        store.save(organization)
    return organization


@router.delete("/{organization_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_organization(
    organization_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    store = EntityStore(db)
    with atomic(db, "delete organization"):
        organization = _require_own(ctx, store, organization_id)
        if organization.properties:
            raise ConflictError(f"Organization {organization_id} still owns properties")
        store.delete(Organization, organization_id, label="Organization")
    return None
