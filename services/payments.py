from typing import Any, Optional

import stripe

from core.config import STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET, PUBLIC_BASE_URL
from core.logging_config import get_logger

logger = get_logger(__name__)

# Credit packages, prices in cents. Must match the front end's CreditsModal.
CREDIT_PACKAGES = {
    10: {"price": 499, "name": "10 Credits"},
    25: {"price": 999, "name": "25 Credits"},
    50: {"price": 1499, "name": "50 Credits"},
    100: {"price": 2499, "name": "100 Credits"},
}

CHECKOUT_COMPLETED = "checkout.session.completed"


class WebhookVerificationError(Exception):
    pass


def _field(obj: Any, key: str, default=None):
    """Read a key from a Stripe object or a plain dict."""
    if obj is None:
        return default
    try:
        value = obj[key]
    except (KeyError, TypeError):
        return default
    return default if value is None else value


def final_price_cents(credits: int, discounted_price: Optional[float] = None) -> int:
    if discounted_price is not None:
        return int(round(discounted_price * 100))
    return CREDIT_PACKAGES[credits]["price"]


class PaymentService:
    """Stripe Checkout for credit packages. Credits are granted by the client after redirect."""

    def __init__(
        self,
        api_key: Optional[str] = STRIPE_SECRET_KEY,
        webhook_secret: Optional[str] = STRIPE_WEBHOOK_SECRET,
        base_url: str = PUBLIC_BASE_URL,
    ):
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.base_url = base_url.rstrip("/")

    def create_checkout_session(
        self,
        credits: int,
        user_id: str,
        email: Optional[str] = None,
        coupon_code: Optional[str] = None,
        discounted_price: Optional[float] = None,
        referred_by: Optional[str] = None,
    ) -> dict:
        package = CREDIT_PACKAGES[credits]
        final_price = final_price_cents(credits, discounted_price)

        logger.info(f"Creating checkout session for {credits} credits at ${final_price / 100:.2f}")
        logger.info(f"   User: {user_id}, Email: {email or 'not provided'}")
        if coupon_code:
            logger.info(f"   Coupon: {coupon_code}")
        if referred_by:
            logger.info(f"   Referred by: {referred_by}")

        params = dict(
            payment_method_types=["card"],
            line_items=[
                {
                    "price_data": {
                        "currency": "usd",
                        "product_data": {
                            "name": f"Tapolio {package['name']}",
                            "description": f"{credits} interview practice credits",
                        },
                        "unit_amount": final_price,
                    },
                    "quantity": 1,
                }
            ],
            mode="payment",
            success_url=(
                f"{self.base_url}/payment-success?session_id={{CHECKOUT_SESSION_ID}}"
                f"&credits={credits}&coupon={coupon_code or ''}&referredBy={referred_by or ''}"
            ),
            cancel_url=f"{self.base_url}/home",
            metadata={
                "userId": user_id,
                "credits": str(credits),
                "couponCode": coupon_code or "",
                "referredBy": referred_by or "",
                "originalPrice": str(package["price"]),
                "finalPrice": str(final_price),
            },
            api_key=self.api_key,
        )
        if email:
            params["customer_email"] = email

        session = stripe.checkout.Session.create(**params)
        logger.info(f"Checkout session created: {_field(session, 'id')}")
        return {"session_id": _field(session, "id"), "url": _field(session, "url")}

    def verify_payment(self, session_id: str) -> dict:
        """Look up a checkout session and report whether it has been paid."""
        session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)

        if _field(session, "payment_status") != "paid":
            logger.warning(f"Payment not completed for session: {session_id}")
            return {"success": False}

        metadata = _field(session, "metadata", {})
        logger.info(f"Payment verified for session: {session_id}")
        return {
            "success": True,
            "credits": int(_field(metadata, "credits", "0") or 0),
            "coupon_code": _field(metadata, "couponCode") or None,
            "referred_by": _field(metadata, "referredBy") or None,
            "user_id": _field(metadata, "userId"),
        }

    @property
    def webhooks_enabled(self) -> bool:
        return bool(self.webhook_secret)

    def construct_webhook_event(self, payload: bytes, signature: Optional[str]):
        try:
            return stripe.Webhook.construct_event(
                payload=payload, sig_header=signature or "", secret=self.webhook_secret
            )
        except (ValueError, stripe.SignatureVerificationError) as e:
            raise WebhookVerificationError(str(e)) from e

    def handle_webhook_event(self, event) -> None:
        """Log completed checkouts for reconciliation. Nothing is granted here."""
        if _field(event, "type") != CHECKOUT_COMPLETED:
            logger.info(f"Ignoring Stripe event: {_field(event, 'type')}")
            return

        session = _field(_field(event, "data", {}), "object", {})
        metadata = _field(session, "metadata", {})
        amount_total = _field(session, "amount_total", 0)
        currency = (_field(session, "currency") or "").upper()

        logger.info(f"Payment successful! Session ID: {_field(session, 'id')}")
        logger.info(f"   Customer email: {_field(_field(session, 'customer_details', {}), 'email')}")
        logger.info(f"   Amount: {amount_total / 100} {currency}")
        logger.info(f"   Credits package: {_field(metadata, 'credits')}")
        logger.info(f"   User ID: {_field(metadata, 'userId')}")
