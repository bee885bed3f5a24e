from fastapi import Request

from services.conversation import ConversationLog
from services.interview_ai import InterviewAI
from services.payments import PaymentService
from services.rate_limiter import get_identifier
from services.session_store import InterviewSessionStore


def get_interview_ai(request: Request) -> InterviewAI:
    return request.app.state.interview_ai


def get_session_store(request: Request) -> InterviewSessionStore:
    return request.app.state.sessions


def get_conversation(request: Request) -> ConversationLog:
    return request.app.state.conversation


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payments


def get_client_id(request: Request) -> str:
    return get_identifier(request)
