"""
Payment service for one-time plan purchases through Stripe Checkout.

Order lifecycle: PENDING -> SUCCESS | FAILED | CANCELLED. A successful
payment upgrades the buyer to ``pro`` and opens a subscription window.
"""
import logging
import secrets
import string
import time
from datetime import datetime, timedelta
from typing import Any, Optional, Tuple
import stripe
from sqlalchemy.orm import Session

from chefdhundo.core.config import (
    STRIPE_SECRET_KEY,
    STRIPE_WEBHOOK_SECRET,
    DEFAULT_CURRENCY,
    FRONTEND_URL
)
from chefdhundo.db.models.user import User
from chefdhundo.db.models.payment import Payment, TERMINAL_PAYMENT_STATUSES
from chefdhundo.db.models.subscription import Subscription

logger = logging.getLogger(__name__)

# Initialize Stripe client
if STRIPE_SECRET_KEY:
    stripe.api_key = STRIPE_SECRET_KEY
else:
    logger.warning("STRIPE_SECRET_KEY not configured - payment features disabled")

ORDER_ID_MAX_LENGTH = 45
DEFAULT_PLAN_DURATION_DAYS = 30
_BASE36 = string.digits + string.ascii_lowercase


class PaymentGatewayError(Exception):
    """Raised when Stripe rejects a request or is unreachable."""


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_order_id() -> str:
    """Internal order id: ``order_<base36 ms timestamp>_<8 random chars>``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(8))
    order_id = f"order_{_base36(int(time.time() * 1000))}_{suffix}"
    return order_id[:ORDER_ID_MAX_LENGTH]


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def _get(obj: Any, key: str, default: Any = None) -> Any:
    # Stripe objects and plain dicts both show up here
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def get_payment_by_order_id(db: Session, order_id: str) -> Optional[Payment]:
    return db.query(Payment).filter(Payment.order_id == order_id).first()


def create_order(
    db: Session,
    user: User,
    amount: float,
    plan_id: str,
    plan_name: str,
    plan_duration_days: int = DEFAULT_PLAN_DURATION_DAYS,
    currency: str = DEFAULT_CURRENCY,
) -> Tuple[Payment, str]:
    """
    Create a PENDING payment and its Stripe Checkout session.

    Returns:
        Tuple of (payment, checkout url)

    Raises:
        ValueError: If the amount is invalid
        PaymentGatewayError: If Stripe is not configured or rejects the session
    """
    if amount < 1:
        raise ValueError("Amount must be at least 1")

    if not STRIPE_SECRET_KEY:
        raise PaymentGatewayError("Payment gateway not configured")

    order_id = generate_order_id()
    payment = Payment(
        user_id=user.id,
        order_id=order_id,
        plan_id=plan_id,
        plan_name=plan_name,
        amount=amount,
        currency=currency,
        status="PENDING",
        extra={"plan_duration_days": plan_duration_days},
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)

    try:
        session = stripe.checkout.Session.create(
            mode="payment",
            customer_email=user.email,
            client_reference_id=order_id,
            line_items=[{
                "price_data": {
                    "currency": currency.lower(),
                    "unit_amount": to_minor_units(amount),
                    "product_data": {"name": plan_name},
                },
                "quantity": 1,
            }],
            success_url=f"{FRONTEND_URL}/payment?order_id={order_id}",
            cancel_url=f"{FRONTEND_URL}/payment/failed?order_id={order_id}",
            metadata={
                "order_id": order_id,
                "user_id": str(user.id),
                "plan_id": plan_id,
            },
        )
    except stripe.StripeError as e:
        logger.error(f"Stripe error creating checkout session for order_id={order_id}: {e}")
        payment.status = "FAILED"
        payment.error_message = str(e)
        db.commit()
        raise PaymentGatewayError(f"Failed to create checkout session: {e}")

    payment.gateway_order_id = _get(session, "id")
    db.commit()
    db.refresh(payment)

    logger.info(f"Order created: order_id={order_id}, user_id={user.id}, session_id={payment.gateway_order_id}")
    return payment, _get(session, "url")


def mark_success(
    db: Session,
    payment: Payment,
    gateway_payment_id: Optional[str] = None,
    payment_method: Optional[str] = None,
) -> Payment:
    """
    Finalize a paid order. Safe to call more than once: a payment already in
    SUCCESS is returned untouched.
    """
    if payment.status == "SUCCESS":
        return payment

    now = datetime.utcnow()
    payment.status = "SUCCESS"
    payment.payment_time = now
    payment.error_message = None
    if gateway_payment_id:
        payment.gateway_payment_id = gateway_payment_id
    if payment_method:
        payment.payment_method = payment_method

    user = db.query(User).filter(User.id == payment.user_id).first()
    if user is not None and user.role != "admin":
        user.role = "pro"

    existing = db.query(Subscription).filter(Subscription.payment_id == payment.id).first()
    if existing is None:
        duration = (payment.extra or {}).get("plan_duration_days", DEFAULT_PLAN_DURATION_DAYS)
        db.add(Subscription(
            user_id=payment.user_id,
            payment_id=payment.id,
            plan_id=payment.plan_id,
            plan_name=payment.plan_name,
            plan_duration_days=duration,
            start_date=now,
            end_date=now + timedelta(days=duration),
            status="ACTIVE",
            auto_renew=False,
        ))

    db.commit()
    db.refresh(payment)
    logger.info(f"Payment succeeded: order_id={payment.order_id}, user_id={payment.user_id}")
    return payment


def mark_closed(db: Session, payment: Payment, status: str, error_message: Optional[str] = None) -> Payment:
    """Move a PENDING payment to FAILED or CANCELLED. Terminal payments are left alone."""
    if payment.status in TERMINAL_PAYMENT_STATUSES:
        return payment

    payment.status = status
    payment.error_message = error_message
    db.commit()
    db.refresh(payment)
    logger.info(f"Payment closed: order_id={payment.order_id}, status={status}")
    return payment


def verify_order(db: Session, payment: Payment) -> Payment:
    """
    Reconcile a payment with its Checkout session after the buyer returns.

    Raises:
        PaymentGatewayError: If the session cannot be retrieved
    """
    if payment.status in TERMINAL_PAYMENT_STATUSES:
        return payment

    if not payment.gateway_order_id:
        raise ValueError("Order has no checkout session")

    try:
        session = stripe.checkout.Session.retrieve(payment.gateway_order_id)
    except stripe.StripeError as e:
        logger.error(f"Stripe error retrieving session for order_id={payment.order_id}: {e}")
        raise PaymentGatewayError(f"Failed to verify payment: {e}")

    if _get(session, "client_reference_id") not in (None, payment.order_id):
        logger.warning(f"Checkout session {payment.gateway_order_id} does not belong to order_id={payment.order_id}")
        raise ValueError("Checkout session does not match order")

    if _get(session, "payment_status") == "paid":
        return mark_success(db, payment, _get(session, "payment_intent"), "card")

    if _get(session, "status") == "expired":
        return mark_closed(db, payment, "CANCELLED", "Checkout session expired")

    return payment


def construct_webhook_event(payload: bytes, signature: Optional[str]):
    """
    Verify and parse a Stripe webhook event.

    Raises:
        ValueError: If the webhook secret is missing or verification fails
    """
    if not STRIPE_WEBHOOK_SECRET:
        raise ValueError("STRIPE_WEBHOOK_SECRET not configured")

    try:
        event = stripe.Webhook.construct_event(payload, signature, STRIPE_WEBHOOK_SECRET)
    except ValueError as e:
        logger.error(f"Invalid webhook payload: {e}")
        raise ValueError(f"Invalid webhook payload: {e}")
    except stripe.SignatureVerificationError as e:
        logger.error(f"Webhook signature verification failed: {e}")
        raise ValueError(f"Invalid signature: {e}")

    logger.info(f"Verified webhook event: {event['type']}, id={event['id']}")
    return event


def handle_webhook_event(db: Session, event) -> Optional[Payment]:
    """Apply a verified Checkout webhook event to its payment."""
    event_type = event["type"]
    session = event["data"]["object"]

    order_id = _get(session, "client_reference_id") or (_get(session, "metadata") or {}).get("order_id")
    if not order_id:
        logger.warning(f"Webhook {event_type} without order reference ignored")
        return None

    payment = get_payment_by_order_id(db, order_id)
    if payment is None:
        logger.warning(f"Webhook {event_type} for unknown order_id={order_id}")
        return None

    if event_type in ("checkout.session.completed", "checkout.session.async_payment_succeeded"):
        if _get(session, "payment_status") == "paid":
            return mark_success(db, payment, _get(session, "payment_intent"), "card")
        return payment

    if event_type == "checkout.session.expired":
        return mark_closed(db, payment, "CANCELLED", "Checkout session expired")

    if event_type == "checkout.session.async_payment_failed":
        return mark_closed(db, payment, "FAILED", "Payment failed")

    logger.debug(f"Unhandled webhook event type: {event_type}")
    return payment


def get_active_subscription(db: Session, user: User, now: Optional[datetime] = None) -> Optional[Subscription]:
    now = now or datetime.utcnow()
    return (
        db.query(Subscription)
        .filter(
            Subscription.user_id == user.id,
            Subscription.status == "ACTIVE",
            Subscription.end_date > now,
        )
        .order_by(Subscription.end_date.desc())
        .first()
    )
