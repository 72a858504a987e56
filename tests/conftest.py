"""Pytest configuration and fixtures"""
import os
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from musicstore.db.session import get_session
from musicstore.main import app
from musicstore.models import Product
from musicstore.services.cart import ShoppingCart
from musicstore.services.checkout import CheckoutService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def cart(session):
    return ShoppingCart(session)


@pytest.fixture
def checkout_service(session, cart):
    return CheckoutService(session, cart)


@pytest.fixture
def make_product(session):
    """Factory adding a catalog entry and returning its id"""
    def _make(name="Album", price="10.00"):
        product = Product(name=name, price=Decimal(price))
        session.add(product)
        session.commit()
        session.refresh(product)
        return product.id
    return _make


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
