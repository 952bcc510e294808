import os

# Must be set before app modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TESTING", "true")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.context import RequestContext
from app.core.security import create_access_token, get_password_hash
from app.database import get_db
from app.db.base import Base
from app.main import app
from app.models.organization import Organization
from app.models.user import User
from app.schemas.property import PropertyStructureCreate
from app.schemas.tenancy import CompleteTenancyCreate
from app.services.property_builder import build_property_structure
from app.services.tenancy_service import TenancyService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def ctx():
    return RequestContext.system()


@pytest.fixture
def build_structure(db, ctx):
    """Factory: build a property with lettered floors and numbered units."""
    def _build(floor_count=2, units_per_floor=3, context=None, **overrides):
        fields = {
            "property_name": "Kilimani Heights",
            "property_address": "Argwings Kodhek Rd, Nairobi",
            "floor_count": floor_count,
            "units_per_floor": units_per_floor,
            "default_rent": 20000,
        }
        fields.update(overrides)
        return build_property_structure(context or ctx, db, PropertyStructureCreate(**fields))
    return _build


@pytest.fixture
def unit_by_number():
    def _find(property_, number):
        return next(unit for unit in property_.units if unit.unit_number == number)
    return _find


@pytest.fixture
def lease(db, ctx):
    """Factory: move a new tenant into the given units, returns the tenant id."""
    def _lease(property_, units, first_name="Wanjiru", monthly_rent=20000, start_date=date(2024, 3, 1), context=None):
        request = CompleteTenancyCreate(
            property_id=property_.id,
            unit_ids=[unit.id for unit in units],
            first_name=first_name,
            last_name="Kamau",
            phone="+254712345678",
            monthly_rent=monthly_rent,
            start_date=start_date,
        )
        return TenancyService(db).create_complete_tenancy(context or ctx, request)
    return _lease


@pytest.fixture
def organization(db):
    organization = Organization(name="Acme Homes", email="info@acme-homes.co.ke")
    db.add(organization)
    db.commit()
    return organization


@pytest.fixture
def make_user(db):
    def _make(email, organization_=None, password="s3cret-pass", role="manager"):
        user = User(
            email=email,
            full_name="Property Manager",
            hashed_password=get_password_hash(password),
            role=role,
            organization_id=organization_.id if organization_ else None,
        )
        db.add(user)
        db.commit()
        return user
    return _make


@pytest.fixture
def manager(make_user, organization):
    return make_user("manager@acme-homes.co.ke", organization)


@pytest.fixture
def bearer():
    def _bearer(user) -> dict:
        return {"Authorization": f"Bearer {create_access_token(data={'sub': str(user.id)})}"}
    return _bearer


@pytest.fixture
def auth_headers(manager, bearer):
    return bearer(manager)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
