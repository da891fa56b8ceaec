"""
Notification Service - order and payment emails
"""
import asyncio
import logging
import smtplib
from dataclasses import dataclass
from datetime import datetime, timezone
from email.mime.text import MIMEText
from typing import Dict, List, Optional

from storefront.config import Settings
from storefront.errors import UpstreamError

logger = logging.getLogger(__name__)

ORDER_CONFIRMATION = "order_confirmation"
PAYMENT_CONFIRMATION = "payment_confirmation"
ADMIN_ORDER_NOTIFICATION = "admin_order_notification"


@dataclass
class NotificationOutcome:
    """Result of one fan-out channel"""
    channel: str
    status: str  # sent, skipped, failed
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"


def _money(value) -> str:
    try:
        return f"₹{float(value or 0):.2f}"
    except (TypeError, ValueError):
        return "₹0.00"


def _item_line(item: Dict) -> str:
    product = item.get("product") if isinstance(item.get("product"), dict) else item
    name = product.get("name") or "Product"
    price = product.get("discountPrice")
    if price is None:
        price = product.get("price") or 0
    quantity = item.get("quantity") or 1
    try:
        line_total = float(price) * int(quantity)
    except (TypeError, ValueError):
        line_total = 0
    return f"- {quantity} × {name} = {_money(line_total)}"


def format_items(items: Optional[List[Dict]]) -> str:
    if not items:
        return "(no items)"
    return "\n".join(_item_line(item) for item in items)


def _format_when(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, (int, float)):
        # Epoch milliseconds from the storefront client
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")
    return str(value) if value else "N/A"


class NotificationService:
    """Service for sending order notifications"""

    def __init__(self, config: Settings):
        self.email_service = config.EMAIL_SERVICE
        self.config = config

    # ---------- messages ----------

    def order_confirmation_message(self, order: Dict):
        subject = f"Order Confirmed • #{order.get('id')}"
        body = f"""Hi {order.get('userName') or 'there'},

Thanks for your order!

Order #{order.get('id')}
Total: {_money(order.get('total'))}
Status: {order.get('status', 'pending')}
Payment: {order.get('paymentMethod', 'N/A')}

Items:
{format_items(order.get('items'))}

Shipping:
{order.get('address') or 'N/A'}

We'll notify you when it ships.

- {self.config.STORE_NAME}
"""
        return subject, body

    def payment_confirmation_message(self, payment: Dict):
        order = payment.get("orderData") or {}
        amount = payment.get("amount", order.get("total"))
        subject = f"Payment Received • {payment.get('id')}"
        body = f"""Hi {order.get('userName') or 'there'},

We have received your payment.

Payment ID: {payment.get('id')}
Gateway Order ID: {payment.get('razorpay_order_id', 'N/A')}
Amount: {_money(amount)}

- {self.config.STORE_NAME}
"""
        return subject, body

    def admin_order_message(self, order: Dict):
        customer = order.get("userName") or order.get("userEmail") or "Guest"
        subject = f"New order #{order.get('id')} • {_money(order.get('total'))} • {customer}"
        body = f"""New order received.

Order: #{order.get('id')}
When: {_format_when(order.get('createdAt'))}
Customer: {order.get('userName') or 'N/A'} ({order.get('userEmail') or 'N/A'})
Phone: {order.get('phone') or 'N/A'}
Total: {_money(order.get('total'))}
Status: {order.get('status', 'pending')}
Payment: {order.get('paymentMethod', 'N/A')}

Items:
{format_items(order.get('items'))}

Ship to:
{order.get('address') or 'N/A'}
"""
        return subject, body

    # ---------- single sends ----------

    def send_order_confirmation(self, user_email: str, order: Dict):
        subject, body = self.order_confirmation_message(order)
        self._send(user_email, subject, body)

    def send_payment_confirmation(self, user_email: str, payment: Dict):
        subject, body = self.payment_confirmation_message(payment)
        self._send(user_email, subject, body)

    def send_admin_order_notification(self, order: Dict):
        if not self.config.ADMIN_EMAIL:
            raise UpstreamError("Admin notification address is not configured")
        subject, body = self.admin_order_message(order)
        self._send(self.config.ADMIN_EMAIL, subject, body)

    # ---------- fan-out ----------

    async def dispatch_order_notifications(self, order: Dict, payment: Dict) -> List[NotificationOutcome]:
        """
        Send the three post-order notifications concurrently

        Each channel is attempted independently; a failure in one never
        prevents the others and is reported as a `failed` outcome.

        Args:
            order: Persisted order in its wire (camelCase) form
            payment: Verified payment payload, `id` set to the payment id

        Returns:
            One outcome per channel
        """
        user_email = order.get("userEmail")
        channels = [
            (ORDER_CONFIRMATION,
             (lambda: self.send_order_confirmation(user_email, order)) if user_email else None),
            (PAYMENT_CONFIRMATION,
             (lambda: self.send_payment_confirmation(user_email, payment))
             if user_email and payment.get("id") else None),
            (ADMIN_ORDER_NOTIFICATION,
             lambda: self.send_admin_order_notification(order)),
        ]
        return list(await asyncio.gather(*(self._attempt(name, send) for name, send in channels)))

    async def _attempt(self, channel: str, send) -> NotificationOutcome:
        if send is None:
            logger.info(f"Skipping {channel} for order: no recipient")
            return NotificationOutcome(channel, "skipped")
        try:
            await asyncio.to_thread(send)
        except Exception as e:
            logger.exception(f"{channel} email failed: {e}")
            return NotificationOutcome(channel, "failed", str(e))
        logger.info(f"{channel} email sent")
        return NotificationOutcome(channel, "sent")

    # ---------- transports ----------

    def _send(self, to: str, subject: str, body: str):
        if self.email_service == "console":
            self._send_console_notification(to, subject, body)
        elif self.email_service == "smtp":
            self._send_smtp_notification(to, subject, body)
        else:
            raise UpstreamError(f"Unknown email service: {self.email_service}")

    def _send_console_notification(self, to: str, subject: str, body: str):
        """Log the email instead of sending it (development mode)"""
        logger.info(f"EMAIL (console mode) To: {to} | Subject: {subject}\n{body}")

    def _send_smtp_notification(self, to: str, subject: str, body: str):
        sender = self.config.sender_address
        msg = MIMEText(body, "plain", "utf-8")
        msg["From"] = f"{self.config.STORE_NAME} <{sender}>"
        msg["To"] = to
        msg["Subject"] = subject

        host, port = self.config.SMTP_HOST, self.config.SMTP_PORT
        timeout = self.config.UPSTREAM_TIMEOUT
        try:
            if port == 465:
                smtp = smtplib.SMTP_SSL(host, port, timeout=timeout)
            else:
                smtp = smtplib.SMTP(host, port, timeout=timeout)
            with smtp:
                smtp.ehlo()
                if port != 465 and smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
                if self.config.SMTP_USER:
                    smtp.login(self.config.SMTP_USER, self.config.SMTP_PASS)
                smtp.sendmail(sender, [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise UpstreamError(f"SMTP delivery to {to} failed: {e}")
