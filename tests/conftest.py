"""Shared fixtures: file-backed SQLite database, API client, recording publisher."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EVENTS_ENABLED"] = "false"
os.environ["EMAIL_SERVICE"] = "console"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront.api.deps import get_event_publisher
from storefront.database import Base, get_db, init_db
from storefront.main import app
from storefront.models import Category, Product, User


class RecordingPublisher:
    """Stands in for EventPublisher and keeps every published payload."""

    def __init__(self):
        self.events = []

    def publish_order_created(self, order_data):
        self.events.append(("OrderCreated", order_data))
        return True

    def publish_order_status_changed(self, order_data):
        self.events.append(("OrderStatusChanged", order_data))
        return True


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'storefront.db'}",
        connect_args={"check_same_thread": False},
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def client(session_factory, publisher):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_publisher] = lambda: publisher
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(is_admin=False, email=None, name="Mario Rossi"):
        counter["n"] += 1
        user = User(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            is_admin=is_admin,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(is_admin=True, email="admin@example.com", name="Admin")


@pytest.fixture
def customer(make_user):
    return make_user(email="cliente@example.com")


@pytest.fixture
def make_category(db_session):
    def _make(name="Smartphone"):
        category = Category(name=name)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _make


@pytest.fixture
def make_product(db_session):
    def _make(name="Auricolari Bluetooth", price="29.99", stock=10, category=None):
        product = Product(
            name=name,
            price=Decimal(price),
            stock=stock,
            category_id=category.id if category else None,
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


def auth(user):
    """Identity header for a user."""
    return {"X-User-Id": str(user.id)}


def checkout_payload(*lines, email="guest@example.com", payment_confirmed=False):
    return {
        "items": [{"product_id": pid, "quantity": qty} for pid, qty in lines],
        "shipping_address": {
            "address": "Via Roma 1",
            "city": "Roma",
            "post_code": "00100",
            "country": "Italia",
        },
        "customer_email": email,
        "payment_confirmed": payment_confirmed,
    }


@pytest.fixture
def place_order(client, make_product):
    """Create an order through the checkout endpoint and return its JSON."""

    def _place(payment_confirmed=False, user=None, quantity=1, product=None):
        product = product or make_product()
        headers = auth(user) if user else {}
        response = client.post(
            "/orders",
            json=checkout_payload((product.id, quantity), payment_confirmed=payment_confirmed),
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _place
