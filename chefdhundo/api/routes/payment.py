"""
Payment endpoints: checkout order creation, return verification, status
polling, and the Stripe webhook.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from chefdhundo.core.auth_dependency import get_db, get_current_user_obj
from chefdhundo.core.gating import is_admin
from chefdhundo.core.rate_limit import rate_limiter
from chefdhundo.db.models.user import User
from chefdhundo.db.models.payment import Payment
from chefdhundo.schemas.payment import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    PaymentResponse,
    PaymentStatusResponse,
    SubscriptionResponse,
    SubscriptionEnvelope,
)
from chefdhundo.services import payment_service
from chefdhundo.services.payment_service import PaymentGatewayError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payment", tags=["Payment"])


def get_owned_payment(db: Session, order_id: str, user: User) -> Payment:
    payment = payment_service.get_payment_by_order_id(db, order_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

    if payment.user_id != user.id and not is_admin(user):
        logger.warning(f"Payment access denied: user_id={user.id}, order_id={order_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return payment


@router.post(
    "/orders",
    response_model=CreateOrderResponse,
    dependencies=[Depends(rate_limiter("payment_orders", max_requests=10, window_seconds=60))],
)
def create_order(
    order: CreateOrderRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Start a Stripe Checkout for a plan and return the hosted checkout URL."""
    try:
        payment, checkout_url = payment_service.create_order(
            db,
            user,
            amount=order.amount,
            plan_id=order.plan_id,
            plan_name=order.plan_name,
            plan_duration_days=order.plan_duration_days,
        )
        return CreateOrderResponse(
            order_id=payment.order_id,
            checkout_url=checkout_url,
            gateway_order_id=payment.gateway_order_id,
            amount=payment.amount,
            currency=payment.currency,
        )

    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PaymentGatewayError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create order: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create order"
        )


@router.post("/verify", response_model=PaymentStatusResponse)
def verify_payment(
    payload: VerifyPaymentRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Reconcile an order with Stripe after the buyer returns from checkout."""
    payment = get_owned_payment(db, payload.order_id, user)

    try:
        payment = payment_service.verify_order(db, payment)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PaymentGatewayError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to verify payment: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to verify payment"
        )

    return PaymentStatusResponse(status=payment.status, payment=PaymentResponse.model_validate(payment))


@router.get("/status", response_model=PaymentStatusResponse)
def payment_status(
    order_id: str = Query(..., min_length=1),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Current order status; polled by the client after checkout."""
    payment = get_owned_payment(db, order_id, user)
    return PaymentStatusResponse(status=payment.status, payment=PaymentResponse.model_validate(payment))


@router.get("/subscription", response_model=SubscriptionEnvelope)
def current_subscription(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    subscription = payment_service.get_active_subscription(db, user)
    if subscription is None:
        return SubscriptionEnvelope(data=None, message="No active subscription")
    return SubscriptionEnvelope(data=SubscriptionResponse.model_validate(subscription))


# ✅ STRIPE WEBHOOK
@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    payload = await request.body()

    try:
        event = payment_service.construct_webhook_event(payload, stripe_signature)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        payment = payment_service.handle_webhook_event(db, event)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to process webhook {event['type']}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process webhook"
        )

    return {
        "status": "success",
        "order_id": payment.order_id if payment else None,
        "payment_status": payment.status if payment else None,
    }
