from .rate_limiter import SlidingWindowRateLimiter, get_identifier
from .session_store import InterviewSession, InterviewSessionStore
from .conversation import ConversationLog
from .interview_ai import InterviewAI, Evaluation, parse_evaluation
from .payments import PaymentService, CREDIT_PACKAGES
from .sweeper import BackgroundSweeper
from .api_client import TapolioClient, ApiError
