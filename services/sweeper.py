import asyncio
from typing import Optional

from core.config import SWEEP_INTERVAL_SECONDS
from core.logging_config import get_logger
from services.rate_limiter import SlidingWindowRateLimiter
from services.session_store import InterviewSessionStore

logger = get_logger(__name__)


class BackgroundSweeper:
    """Periodically prunes expired interview sessions and idle rate-limit windows."""

    def __init__(
        self,
        sessions: InterviewSessionStore,
        limiter: SlidingWindowRateLimiter,
        interval_seconds: float = SWEEP_INTERVAL_SECONDS,
    ):
        self.sessions = sessions
        self.limiter = limiter
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    def run_once(self) -> dict:
        removed_sessions = self.sessions.sweep()
        removed_clients = self.limiter.sweep()
        if removed_clients:
            logger.debug(f"Dropped {removed_clients} idle rate-limit windows")
        return {"sessions": removed_sessions, "clients": removed_clients}

    async def _loop(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.run_once()
            except Exception:
                logger.exception("Sweep failed")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.get_running_loop().create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
