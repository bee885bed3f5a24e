from .base import CamelModel, FIELD_ERRORS, validation_message
from .suggest import SuggestRequest, SuggestResponse, ConversationEntry, ResetResponse, HealthResponse
from .interview import (
    ALLOWED_TECHNOLOGIES, GENERAL_KNOWLEDGE, question_count_for,
    InterviewStart, InterviewStartResponse,
    AnswerSubmit, InterviewFeedback,
    HintRequest, HintResponse
)
from .payment import CheckoutSessionCreate, CheckoutSessionResponse, PaymentVerification, WebhookAck
