"""Shared fixtures: an in-memory SQLite database and a TestClient.

DATABASE_URL must be set before `database` is imported, so it is
assigned at module import time here.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEOCODING_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine
from app_models import ServiceCategory
from main import app
from helpers import sign_in


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    # Startup creates the tables and seeds the default categories
    with TestClient(app) as c:
        yield c
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(client):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def categories(db):
    """{category name: id} for the seeded categories"""
    return {c.name: c.id for c in db.query(ServiceCategory).all()}


@pytest.fixture
def auth_headers(client):
    return sign_in(client)

