"""Shared fixtures: in-memory SQLite store, API client and identity tokens."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_JSON", "true")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import petcare.db.models  # noqa: F401
from petcare.api.v1.routes.deps import get_db
from petcare.core.config import settings
from petcare.db.base import Base, utcnow
from petcare.db.models.pet import Pet, default_share_settings
from petcare.db.models.pet_member import PetMember
from petcare.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_token(user_id: str, **claims) -> str:
    return jwt.encode({"sub": user_id, **claims}, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


@pytest.fixture
def auth():
    """Build Authorization headers for a user id."""

    def _auth(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id)}"}

    return _auth


@pytest.fixture
def make_pet(db):
    """Insert a pet directly, bypassing the API."""
    counter = {"n": 0}

    def _make_pet(owner_user_id: str = "u1", name: str = "Bella", public: bool = False, **fields) -> Pet:
        counter["n"] += 1
        share_settings = default_share_settings()
        share_settings["allow_public_profile"] = public
        now = utcnow()
        pet = Pet(
            owner_user_id=owner_user_id,
            name=name,
            species=fields.pop("species", "dog"),
            status=fields.pop("status", "active"),
            slug=fields.pop("slug", f"{name.lower()}-t{counter['n']:03d}"),
            share_settings=share_settings,
            created_at=now,
            updated_at=now,
            **fields,
        )
        db.add(pet)
        db.commit()
        return pet

    return _make_pet


@pytest.fixture
def add_member(db):
    def _add_member(pet: Pet, user_id: str, role: str) -> PetMember:
        member = PetMember(pet_id=pet.pet_id, user_id=user_id, role=role)
        db.add(member)
        db.commit()
        return member

    return _add_member


@pytest.fixture
def create_pet(client, auth):
    """Create a pet through the API and return its JSON."""

    def _create_pet(owner_user_id: str = "u1", **payload) -> dict:
        payload.setdefault("name", "Bella")
        payload.setdefault("species", "dog")
        response = client.post("/api/v1/pets", json=payload, headers=auth(owner_user_id))
        assert response.status_code == 201, response.text
        return response.json()

    return _create_pet
