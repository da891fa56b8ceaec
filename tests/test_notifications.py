"""Tests for notification rendering, transports and the stand-alone mail endpoints."""

import asyncio
import smtplib

import pytest

from storefront.config import Settings
from storefront.errors import UpstreamError
from storefront.services.notification_service import NotificationService, format_items


@pytest.fixture
def order_details():
    return {
        "id": "ord_42",
        "userName": "Asha",
        "userEmail": "shopper@example.com",
        "items": [
            {"product": {"name": "Cricket Bat", "price": 500.0, "discountPrice": 400.0}, "quantity": 1},
            {"productId": "p2", "name": "Grip Tape", "price": 25.5, "quantity": 2},
        ],
        "total": 451.0,
        "status": "pending",
        "paymentMethod": "online",
        "address": "12 MG Road, Bengaluru",
        "createdAt": 1767225600000,
    }


def test_format_items_handles_cart_and_flat_lines(order_details):
    text = format_items(order_details["items"])

    assert text.splitlines() == [
        "- 1 × Cricket Bat = ₹400.00",
        "- 2 × Grip Tape = ₹51.00",
    ]


def test_format_items_empty():
    assert format_items([]) == "(no items)"


def test_order_confirmation_message(test_settings, order_details):
    subject, body = NotificationService(test_settings).order_confirmation_message(order_details)

    assert subject == "Order Confirmed • #ord_42"
    assert "Hi Asha," in body
    assert "Total: ₹451.00" in body
    assert "12 MG Road, Bengaluru" in body


def test_admin_message(test_settings, order_details):
    subject, body = NotificationService(test_settings).admin_order_message(order_details)

    assert subject == "New order #ord_42 • ₹451.00 • Asha"
    assert "Customer: Asha (shopper@example.com)" in body
    assert "When: 2026-01-01 00:00" in body


def test_admin_message_guest_customer(test_settings):
    subject, _ = NotificationService(test_settings).admin_order_message({"id": "ord_1", "total": 10})

    assert subject.endswith("• Guest")


def test_payment_message_uses_order_total(test_settings):
    payment = {"id": "pay_001", "razorpay_order_id": "order_abc", "orderData": {"total": 499.99}}

    subject, body = NotificationService(test_settings).payment_confirmation_message(payment)

    assert subject == "Payment Received • pay_001"
    assert "Amount: ₹499.99" in body
    assert "Gateway Order ID: order_abc" in body


def test_unknown_email_service_raises(order_details):
    service = NotificationService(Settings(EMAIL_SERVICE="carrier-pigeon", ADMIN_EMAIL="orders@example.com"))

    with pytest.raises(UpstreamError):
        service.send_admin_order_notification(order_details)


def test_admin_notification_requires_address(order_details):
    service = NotificationService(Settings(EMAIL_SERVICE="console", ADMIN_EMAIL=""))

    with pytest.raises(UpstreamError):
        service.send_admin_order_notification(order_details)


def test_console_transport_sends(test_settings, order_details):
    NotificationService(test_settings).send_order_confirmation("shopper@example.com", order_details)


def test_fan_out_isolates_failures(notifier, order_details):
    notifier.fail_recipients = {"shopper@example.com"}

    outcomes = asyncio.run(notifier.dispatch_order_notifications(order_details, {"id": "pay_001"}))

    assert [o.status for o in outcomes] == ["failed", "failed", "sent"]
    assert all("connection refused" in o.error for o in outcomes if o.status == "failed")
    assert [mail["to"] for mail in notifier.sent] == ["orders@example.com"]


def test_fan_out_skips_payment_mail_without_payment_id(notifier, order_details):
    outcomes = asyncio.run(notifier.dispatch_order_notifications(order_details, {}))

    assert [o.status for o in outcomes] == ["sent", "skipped", "sent"]


# ---------- stand-alone endpoints ----------

def test_order_mail_endpoint(client, notifier, order_details):
    response = client.post("/api/order-mail", json={"userEmail": "shopper@example.com", "orderDetails": order_details})

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert notifier.sent[0]["subject"] == "Order Confirmed • #ord_42"


def test_order_mail_endpoint_invalid_payload(client, order_details):
    order_details.pop("id")

    response = client.post("/api/order-mail", json={"userEmail": "shopper@example.com", "orderDetails": order_details})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid payload"}


def test_order_mail_endpoint_transport_failure(client, notifier, order_details):
    notifier.fail_recipients = {"*"}

    response = client.post("/api/order-mail", json={"userEmail": "shopper@example.com", "orderDetails": order_details})

    assert response.status_code == 500
    assert "failed" in response.json()["error"]


def test_admin_notification_endpoint(client, notifier, order_details):
    response = client.post("/api/admin-order-notification", json={"orderDetails": order_details})

    assert response.status_code == 200
    assert notifier.sent[0]["to"] == "orders@example.com"


def test_admin_notification_endpoint_invalid_payload(client):
    response = client.post("/api/admin-order-notification", json={"orderDetails": {}})

    assert response.status_code == 400


def test_payment_mail_endpoint(client, notifier):
    response = client.post(
        "/api/razorpay-mail",
        json={"userEmail": "shopper@example.com", "paymentDetails": {"id": "pay_001", "amount": 10}},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert notifier.sent[0]["subject"] == "Payment Received • pay_001"


def test_payment_mail_endpoint_missing_fields(client):
    response = client.post("/api/razorpay-mail", json={"userEmail": "shopper@example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing userEmail or paymentDetails"}


def test_format_items_string_prices_are_numeric():
    text = format_items([{"name": "Grip Tape", "price": "400", "quantity": 2}])

    assert text == "- 2 × Grip Tape = ₹800.00"


def test_format_items_unparseable_price():
    assert format_items([{"name": "Grip Tape", "price": "n/a", "quantity": 2}]) == "- 2 × Grip Tape = ₹0.00"


# ---------- smtp transport ----------

class FakeSMTP:
    """Stands in for smtplib.SMTP / SMTP_SSL and records the session."""

    instances = []

    def __init__(self, host, port, timeout=None, starttls=True, fail_with=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.supports_starttls = starttls
        self.fail_with = fail_with
        self.calls = []
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.calls.append("quit")
        return False

    def ehlo(self):
        self.calls.append("ehlo")

    def has_extn(self, name):
        return name == "starttls" and self.supports_starttls

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def sendmail(self, sender, recipients, message):
        if self.fail_with:
            raise self.fail_with
        self.calls.append("sendmail")
        self.messages.append((sender, recipients, message))


@pytest.fixture
def smtp_settings(test_settings):
    def build(port):
        return test_settings.model_copy(update={
            "EMAIL_SERVICE": "smtp",
            "SMTP_HOST": "smtp.example.com",
            "SMTP_PORT": port,
            "SMTP_USER": "mailer@example.com",
            "SMTP_PASS": "app-password",
        })
    FakeSMTP.instances = []
    return build


def test_smtp_starttls_session(smtp_settings, order_details, monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(smtplib, "SMTP_SSL", lambda *a, **kw: pytest.fail("SSL used on port 587"))

    NotificationService(smtp_settings(587)).send_order_confirmation("shopper@example.com", order_details)

    session = FakeSMTP.instances[0]
    assert (session.host, session.port) == ("smtp.example.com", 587)
    assert session.calls == [
        "ehlo", "starttls", "ehlo", ("login", "mailer@example.com", "app-password"), "sendmail", "quit"
    ]
    sender, recipients, message = session.messages[0]
    assert sender == "store@example.com"
    assert recipients == ["shopper@example.com"]
    assert "To: shopper@example.com" in message


def test_smtp_ssl_session(smtp_settings, order_details, monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTP)
    monkeypatch.setattr(smtplib, "SMTP", lambda *a, **kw: pytest.fail("plain SMTP used on port 465"))

    NotificationService(smtp_settings(465)).send_admin_order_notification(order_details)

    session = FakeSMTP.instances[0]
    assert session.port == 465
    assert "starttls" not in session.calls
    assert session.messages[0][1] == ["orders@example.com"]


def test_smtp_failure_raises_upstream_error(smtp_settings, order_details, monkeypatch):
    def failing_session(host, port, timeout=None):
        return FakeSMTP(host, port, timeout, fail_with=smtplib.SMTPException("550 mailbox unavailable"))

    monkeypatch.setattr(smtplib, "SMTP", failing_session)

    with pytest.raises(UpstreamError, match="mailbox unavailable"):
        NotificationService(smtp_settings(587)).send_order_confirmation("shopper@example.com", order_details)
