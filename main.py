from contextlib import asynccontextmanager
from typing import Callable, Optional
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core import config
from core.logging_config import get_logger, setup_logging
from models.base import validation_message
from routers import suggest, interview, payments
from services.conversation import ConversationLog
from services.interview_ai import InterviewAI
from services.payments import PaymentService
from services.rate_limiter import (
    EXEMPT_PATHS, SlidingWindowRateLimiter, get_identifier, rate_limit_exceeded_response
)
from services.session_store import InterviewSessionStore
from services.sweeper import BackgroundSweeper

logger = get_logger(__name__)


def create_app(
    interview_ai: Optional[InterviewAI] = None,
    payment_service: Optional[PaymentService] = None,
    sessions: Optional[InterviewSessionStore] = None,
    limiter: Optional[SlidingWindowRateLimiter] = None,
    clock: Callable[[], float] = time.time,
    production: bool = config.IS_PRODUCTION,
    allowed_origins=None,
) -> FastAPI:
    if sessions is None:
        sessions = InterviewSessionStore(clock=clock)
    if limiter is None:
        limiter = SlidingWindowRateLimiter()
    if interview_ai is None:
        interview_ai = InterviewAI()
    if payment_service is None:
        payment_service = PaymentService()
    sweeper = BackgroundSweeper(sessions, limiter)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper.start()
        yield
        await sweeper.stop()

    app = FastAPI(title="Tapolio API", lifespan=lifespan)

    app.state.interview_ai = interview_ai
    app.state.payments = payment_service
    app.state.sessions = sessions
    app.state.limiter = limiter
    app.state.sweeper = sweeper
    app.state.conversation = ConversationLog()

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)
        identifier = get_identifier(request)
        if not limiter.hit(identifier):
            logger.warning(f"Rate limit exceeded for {identifier}")
            return rate_limit_exceeded_response()
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins if allowed_origins is not None else config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=86400,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": validation_message(exc.errors())})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(suggest.router)
    if not production:
        app.include_router(suggest.reset_router)
    app.include_router(interview.router)
    app.include_router(payments.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    setup_logging()
    config.validate_settings()
    logger.info(f"Stripe running in {config.STRIPE_MODE.upper()} mode")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
