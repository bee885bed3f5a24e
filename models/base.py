from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case fields in Python, camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Message returned when request-body validation fails on a given JSON field
FIELD_ERRORS = {
    "transcript": "Missing or invalid transcript",
    "technology": "Invalid technology",
    "sessionId": "Invalid session ID",
    "answer": "Answer too long (max 5000 characters)",
    "credits": "Invalid credits package",
    "userId": "User ID is required",
    "email": "Invalid email",
    "couponCode": "Invalid coupon code",
    "discountedPrice": "Invalid discounted price",
    "referredBy": "Invalid referral code",
}
DEFAULT_VALIDATION_ERROR = "Invalid request body"


def validation_message(errors) -> str:
    """Pick the client-facing message for the first failing body field."""
    for error in errors:
        for part in error.get("loc", ()):
            if part in FIELD_ERRORS:
                return FIELD_ERRORS[part]
    return DEFAULT_VALIDATION_ERROR
