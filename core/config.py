import os
from dotenv import load_dotenv
from core.exceptions import ConfigurationError

load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT == "production"
PORT = int(os.getenv("PORT", "4000"))

# OpenAI Settings
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# Stripe Settings
STRIPE_MODE = os.getenv("STRIPE_MODE", "test")
STRIPE_SECRET_KEY = (
    os.getenv("STRIPE_LIVE_SECRET_KEY") if STRIPE_MODE == "live"
    else os.getenv("STRIPE_TEST_SECRET_KEY")
)
STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET")
PUBLIC_BASE_URL = os.getenv(
    "PUBLIC_BASE_URL",
    "https://tapolio.com" if IS_PRODUCTION else "http://localhost:5174"
)

# CORS
DEFAULT_ALLOWED_ORIGINS = [
    "https://tapolio.com",
    "https://www.tapolio.com",
    "http://localhost:5173",
    "http://localhost:5174",
    "http://localhost:8100",
]
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", ",".join(DEFAULT_ALLOWED_ORIGINS)).split(",")
    if origin.strip()
]

# Rate limiting
RATE_LIMIT_MAX_REQUESTS = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "15"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

# Interview sessions
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", str(30 * 60)))
SESSION_COMPLETION_GRACE_SECONDS = int(os.getenv("SESSION_COMPLETION_GRACE_SECONDS", "5"))
MAX_SESSIONS_PER_CLIENT = int(os.getenv("MAX_SESSIONS_PER_CLIENT", "3"))
SWEEP_INTERVAL_SECONDS = int(os.getenv("SWEEP_INTERVAL_SECONDS", str(5 * 60)))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR")


def validate_settings():
    """Fail fast on missing secrets before the server starts listening."""
    if not OPENAI_API_KEY:
        raise ConfigurationError("OPENAI_API_KEY is not set in environment variables")
    if STRIPE_MODE not in ("test", "live"):
        raise ConfigurationError(f"STRIPE_MODE must be 'test' or 'live', got '{STRIPE_MODE}'")
    if not STRIPE_SECRET_KEY:
        raise ConfigurationError(
            f"STRIPE_{STRIPE_MODE.upper()}_SECRET_KEY is not set in environment variables"
        )
