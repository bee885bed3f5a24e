from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Request, Header, Query

from core.dependencies import get_payment_service
from core.logging_config import get_logger
from models.payment import (
    CheckoutSessionCreate, CheckoutSessionResponse, PaymentVerification, WebhookAck
)
from services.payments import CREDIT_PACKAGES, PaymentService, WebhookVerificationError

logger = get_logger(__name__)

router = APIRouter(tags=["Payments"])


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
def create_checkout_session(
    request: CheckoutSessionCreate,
    payments: PaymentService = Depends(get_payment_service)
):
    """
    Create a Stripe Checkout session for a credit package.
    """
    if not request.credits or request.credits not in CREDIT_PACKAGES:
        raise HTTPException(status_code=400, detail="Invalid credits package")
    if not request.user_id:
        raise HTTPException(status_code=400, detail="User ID is required")
    if request.discounted_price is not None and request.discounted_price < 0:
        raise HTTPException(status_code=400, detail="Invalid discounted price")

    try:
        session = payments.create_checkout_session(
            credits=request.credits,
            user_id=request.user_id,
            email=request.email,
            coupon_code=request.coupon_code,
            discounted_price=request.discounted_price,
            referred_by=request.referred_by
        )
        return CheckoutSessionResponse(**session)

    except HTTPException:
        raise
    except Exception:
        logger.exception("Stripe checkout error")
        raise HTTPException(status_code=500, detail="Failed to create checkout session")


@router.get("/verify-payment", response_model=PaymentVerification, response_model_exclude_unset=True)
def verify_payment(
    session_id: Optional[str] = Query(default=None),
    payments: PaymentService = Depends(get_payment_service)
):
    """
    Confirm a checkout session was paid. Called by the client after the Stripe redirect.
    """
    if not session_id:
        raise HTTPException(status_code=400, detail="Session ID is required")

    try:
        result = payments.verify_payment(session_id)
        return PaymentVerification(**result)

    except HTTPException:
        raise
    except Exception:
        logger.exception("Payment verification error")
        raise HTTPException(status_code=500, detail="Failed to verify payment")


@router.post("/stripe-webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None),
    payments: PaymentService = Depends(get_payment_service)
):
    """
    Acknowledge Stripe events. Completed checkouts are logged for reconciliation only.
    """
    if not payments.webhooks_enabled:
        logger.warning("Stripe webhook received but no STRIPE_WEBHOOK_SECRET configured")
        return WebhookAck()

    payload = await request.body()
    try:
        event = payments.construct_webhook_event(payload, stripe_signature)
    except WebhookVerificationError as e:
        logger.error(f"Webhook signature verification failed: {e}")
        raise HTTPException(status_code=400, detail=f"Webhook Error: {e}")

    payments.handle_webhook_event(event)
    return WebhookAck()
