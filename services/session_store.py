from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set
import secrets
import time

from core.config import (
    SESSION_TTL_SECONDS,
    SESSION_COMPLETION_GRACE_SECONDS,
    MAX_SESSIONS_PER_CLIENT,
)
from core.exceptions import (
    SessionNotFoundError,
    SessionLimitError,
    HintAlreadyUsedError,
    InterviewCompleteError,
    QuestionAlreadyAnsweredError,
)
from core.logging_config import get_logger
from models.interview import question_count_for

logger = get_logger(__name__)


@dataclass
class InterviewSession:
    id: str
    technology: str
    client_id: str
    created_at: float
    questions: List[str] = field(default_factory=list)
    answers: List[str] = field(default_factory=list)
    scores: List[int] = field(default_factory=list)
    hints_used: Set[int] = field(default_factory=set)
    completed_at: Optional[float] = None

    @property
    def question_number(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> str:
        return self.questions[-1]

    @property
    def max_questions(self) -> int:
        return question_count_for(self.technology)

    @property
    def is_complete(self) -> bool:
        return self.completed_at is not None

    @property
    def average_score(self) -> float:
        if not self.scores:
            return 0.0
        return sum(self.scores) / len(self.scores)


class InterviewSessionStore:
    """
    In-memory interview sessions with time-based expiry.

    A session disappears `ttl_seconds` after creation, or
    `completion_grace_seconds` after its final answer, whichever comes
    first. Expiry is checked on access and by `sweep()`, both against the
    injected clock.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        ttl_seconds: float = SESSION_TTL_SECONDS,
        completion_grace_seconds: float = SESSION_COMPLETION_GRACE_SECONDS,
        max_sessions_per_client: int = MAX_SESSIONS_PER_CLIENT,
    ):
        self._clock = clock
        self.ttl_seconds = ttl_seconds
        self.completion_grace_seconds = completion_grace_seconds
        self.max_sessions_per_client = max_sessions_per_client
        self._sessions: Dict[str, InterviewSession] = {}

    def _new_id(self, now: float) -> str:
        return f"{int(now * 1000)}{secrets.token_urlsafe(8)}"

    def _is_expired(self, session: InterviewSession, now: float) -> bool:
        if now - session.created_at > self.ttl_seconds:
            return True
        if session.completed_at is not None:
            return now - session.completed_at >= self.completion_grace_seconds
        return False

    def active_count(self, client_id: str) -> int:
        now = self._clock()
        return sum(
            1 for s in self._sessions.values()
            if s.client_id == client_id and not s.is_complete and not self._is_expired(s, now)
        )

    def create(self, technology: str, client_id: str, first_question: str) -> InterviewSession:
        if self.active_count(client_id) >= self.max_sessions_per_client:
            raise SessionLimitError(client_id, self.max_sessions_per_client)

        now = self._clock()
        session_id = self._new_id(now)
        while session_id in self._sessions:
            session_id = self._new_id(now)

        session = InterviewSession(
            id=session_id,
            technology=technology,
            client_id=client_id,
            created_at=now,
            questions=[first_question],
        )
        self._sessions[session_id] = session
        logger.info(f"Session {session_id} created for {technology}")
        return session

    def get(self, session_id: str) -> InterviewSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if self._is_expired(session, self._clock()):
            self.delete(session_id)
            raise SessionNotFoundError(session_id)
        return session

    def record_answer(
        self, session_id: str, answer: str, score: int, question_number: Optional[int] = None
    ) -> InterviewSession:
        """
        Store the answer to the current question. When `question_number` is
        given it must still be the current, unanswered question.
        """
        session = self.get(session_id)
        if session.is_complete:
            raise InterviewCompleteError(session_id)
        answered = len(session.answers) >= len(session.questions)
        if answered or (question_number is not None and question_number != session.question_number):
            raise QuestionAlreadyAnsweredError(session_id, question_number or session.question_number)

        session.answers.append(answer)
        session.scores.append(score)

        if len(session.answers) >= session.max_questions:
            session.completed_at = self._clock()
            logger.info(
                f"Interview {session_id} completed! Average score: {session.average_score:.1f}/10"
            )
        return session

    def add_question(self, session_id: str, question: str) -> InterviewSession:
        session = self.get(session_id)
        if session.is_complete:
            raise InterviewCompleteError(session_id)
        session.questions.append(question)
        return session

    def use_hint(self, session_id: str) -> InterviewSession:
        session = self.get(session_id)
        if session.question_number in session.hints_used:
            raise HintAlreadyUsedError(session_id, session.question_number)
        session.hints_used.add(session.question_number)
        return session

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def sweep(self) -> int:
        """Delete expired and completed-past-grace sessions. Returns the number removed."""
        now = self._clock()
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s, now)]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info(f"Cleaned up {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
