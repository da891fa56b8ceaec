"""Shared pytest fixtures for storefront tests."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_SERVICE", "console")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront import dependencies
from storefront.config import Settings
from storefront.database import Base, get_db
from storefront.main import app
from storefront.models import Order  # noqa: F401
from storefront.services.admin_auth import AdminVerifier
from storefront.services.notification_service import NotificationService
from storefront.services.payment_gateway import RazorpayClient, compute_signature
from storefront.errors import UpstreamError


GATEWAY_SECRET = "test_secret_key"
ADMIN_EMAIL = "owner@example.com"


@pytest.fixture
def test_settings():
    """Settings with every upstream credential filled in."""
    return Settings(
        DATABASE_URL="sqlite://",
        RAZORPAY_KEY_ID="rzp_test_key",
        RAZORPAY_KEY_SECRET=GATEWAY_SECRET,
        RAZORPAY_API_URL="https://gateway.test/v1",
        SHIPROCKET_EMAIL="ship@example.com",
        SHIPROCKET_PASSWORD="ship-pass",
        SHIPROCKET_API_URL="https://shipping.test/v1/external",
        EMAIL_SERVICE="console",
        ADMIN_EMAIL="orders@example.com",
        FROM_EMAIL="store@example.com",
        ADMIN_EMAILS=[ADMIN_EMAIL],
        UPSTREAM_MAX_ATTEMPTS=1,
    )


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


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


class RecordingNotifier(NotificationService):
    """Notification service that records mails instead of delivering them."""

    def __init__(self, config, fail_recipients=()):
        super().__init__(config)
        self.sent = []
        self.fail_recipients = set(fail_recipients)

    def _send(self, to, subject, body):
        if to in self.fail_recipients or "*" in self.fail_recipients:
            raise UpstreamError(f"SMTP delivery to {to} failed: connection refused")
        self.sent.append({"to": to, "subject": subject, "body": body})


class FakeTokenDecoder:
    """Maps known tokens to decoded claims; anything else is rejected."""

    def __init__(self, tokens):
        self.tokens = tokens

    def __call__(self, token):
        if token not in self.tokens:
            raise ValueError("Invalid ID token")
        return self.tokens[token]


@pytest.fixture
def notifier(test_settings):
    return RecordingNotifier(test_settings)


@pytest.fixture
def gateway(test_settings):
    return RazorpayClient(test_settings)


@pytest.fixture
def admin_verifier():
    return AdminVerifier(
        [ADMIN_EMAIL],
        FakeTokenDecoder({
            "admin-token": {"email": ADMIN_EMAIL, "uid": "uid-admin"},
            "customer-token": {"email": "shopper@example.com", "uid": "uid-shopper"},
        }),
    )


@pytest.fixture
def client(db_session, gateway, notifier, admin_verifier):
    """Test client with the database and upstream clients substituted."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[dependencies.get_payment_gateway] = lambda: gateway
    app.dependency_overrides[dependencies.get_notifier] = lambda: notifier
    app.dependency_overrides[dependencies.get_admin_verifier] = lambda: admin_verifier
    yield TestClient(app)
    app.dependency_overrides.clear()


def sign(order_id, payment_id, secret=GATEWAY_SECRET):
    return compute_signature(secret, order_id, payment_id)


@pytest.fixture
def order_data():
    """Client-side order payload in the storefront's camelCase shape."""
    return {
        "userId": "user-123",
        "items": [
            {"product": {"id": "p1", "name": "Cricket Bat", "price": 400.0}, "quantity": 1},
            {"productId": "p2", "name": "Grip Tape", "price": 49.995, "quantity": 2},
        ],
        "total": 499.99,
        "address": "12 MG Road, Bengaluru, 560001, 9876543210",
        "userEmail": "shopper@example.com",
        "userName": "Asha",
        "paymentMethod": "online",
    }


@pytest.fixture
def verify_payload(order_data):
    return {
        "razorpay_order_id": "order_abc",
        "razorpay_payment_id": "pay_001",
        "razorpay_signature": sign("order_abc", "pay_001"),
        "orderData": order_data,
    }


@pytest.fixture
def signer():
    """Signs `order_id|payment_id` the way the gateway does."""
    return sign
