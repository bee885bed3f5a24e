from pydantic import EmailStr
from typing import Optional
from models.base import CamelModel


class CheckoutSessionCreate(CamelModel):
    credits: Optional[int] = None
    user_id: Optional[str] = None
    email: Optional[EmailStr] = None
    coupon_code: Optional[str] = None
    discounted_price: Optional[float] = None  # dollars, already discounted by the client
    referred_by: Optional[str] = None


class CheckoutSessionResponse(CamelModel):
    session_id: str
    url: str


class PaymentVerification(CamelModel):
    success: bool
    credits: Optional[int] = None
    coupon_code: Optional[str] = None
    referred_by: Optional[str] = None
    user_id: Optional[str] = None


class WebhookAck(CamelModel):
    received: bool = True
