from fastapi import APIRouter, HTTPException, Depends

from core.dependencies import get_interview_ai, get_session_store, get_client_id
from core.exceptions import (
    TapolioError,
    SessionNotFoundError,
    SessionLimitError,
    HintAlreadyUsedError,
    InterviewCompleteError,
    QuestionAlreadyAnsweredError,
)
from core.logging_config import get_logger
from models.interview import (
    ALLOWED_TECHNOLOGIES, MAX_ANSWER_LENGTH, MAX_SESSION_ID_LENGTH,
    InterviewStart, InterviewStartResponse,
    AnswerSubmit, InterviewFeedback,
    HintRequest, HintResponse
)
from services.interview_ai import InterviewAI
from services.session_store import InterviewSessionStore

logger = get_logger(__name__)

router = APIRouter(prefix="/interview", tags=["Interview"])

ERROR_STATUS = {
    SessionNotFoundError: 404,
    SessionLimitError: 429,
    HintAlreadyUsedError: 429,
    InterviewCompleteError: 400,
    QuestionAlreadyAnsweredError: 409,
}


def to_http_error(exc: TapolioError) -> HTTPException:
    return HTTPException(status_code=ERROR_STATUS.get(type(exc), 500), detail=exc.message)


def _validate_session_id(session_id) -> None:
    if not session_id or len(session_id) > MAX_SESSION_ID_LENGTH:
        raise HTTPException(status_code=400, detail="Invalid session ID")


@router.post("/start", response_model=InterviewStartResponse)
async def start_interview(
    request: InterviewStart,
    ai: InterviewAI = Depends(get_interview_ai),
    sessions: InterviewSessionStore = Depends(get_session_store),
    client_id: str = Depends(get_client_id)
):
    """
    Start a mock interview for one of the allowed technologies.
    Generates the first question before the session is stored.
    """
    if not request.technology:
        raise HTTPException(status_code=400, detail="Technology required")
    if request.technology not in ALLOWED_TECHNOLOGIES:
        raise HTTPException(status_code=400, detail="Invalid technology")

    try:
        if sessions.active_count(client_id) >= sessions.max_sessions_per_client:
            raise SessionLimitError(client_id, sessions.max_sessions_per_client)

        logger.info(f"Starting interview for: {request.technology}")
        first_question = await ai.generate_question(request.technology, 1)
        logger.info(f"Generated Q1: \"{first_question}\"")

        session = sessions.create(request.technology, client_id, first_question)
        return InterviewStartResponse(session_id=session.id, first_question=first_question)

    except TapolioError as e:
        raise to_http_error(e)
    except Exception:
        logger.exception("Failed to start interview")
        raise HTTPException(status_code=500, detail="Failed to start interview")


@router.post("/answer", response_model=InterviewFeedback)
async def submit_answer(
    request: AnswerSubmit,
    ai: InterviewAI = Depends(get_interview_ai),
    sessions: InterviewSessionStore = Depends(get_session_store)
):
    """
    Score the answer to the current question and move on to the next one.
    The final answer marks the interview complete.
    """
    if not request.session_id or not request.answer:
        raise HTTPException(status_code=400, detail="Missing sessionId or answer")
    if len(request.answer) > MAX_ANSWER_LENGTH:
        raise HTTPException(
            status_code=400, detail=f"Answer too long (max {MAX_ANSWER_LENGTH} characters)"
        )
    _validate_session_id(request.session_id)

    try:
        session = sessions.get(request.session_id)
        if session.is_complete:
            raise InterviewCompleteError(session.id)

        number = session.question_number
        preview = request.answer[:100] + ("..." if len(request.answer) > 100 else "")
        logger.info(f"Received answer for Q{number}: \"{preview}\"")

        evaluation = await ai.evaluate_answer(session.technology, session.current_question, request.answer)
        session = sessions.record_answer(
            session.id, request.answer, evaluation.score, question_number=number
        )
        logger.info(f"Q{number} scored: {evaluation.score}/10")

        if session.is_complete:
            return InterviewFeedback(
                score=evaluation.score,
                feedback=evaluation.feedback,
                next_question=None,
                complete=True
            )

        next_question = await ai.generate_question(session.technology, number + 1, session.questions)
        sessions.add_question(session.id, next_question)
        logger.info(f"Generated Q{number + 1}: \"{next_question}\"")

        return InterviewFeedback(
            score=evaluation.score,
            feedback=evaluation.feedback,
            next_question=next_question,
            complete=False
        )

    except TapolioError as e:
        raise to_http_error(e)
    except Exception:
        logger.exception("Failed to process answer")
        raise HTTPException(status_code=500, detail="Failed to process answer")


@router.post("/hint", response_model=HintResponse)
async def get_hint(
    request: HintRequest,
    ai: InterviewAI = Depends(get_interview_ai),
    sessions: InterviewSessionStore = Depends(get_session_store)
):
    """
    Give a nudge for the current question. One hint per question.
    A finished interview still answers for its last question until it is removed.
    """
    _validate_session_id(request.session_id)

    try:
        session = sessions.use_hint(request.session_id)
        question = session.current_question
        logger.info(f"Generating hint for: \"{question}\"")

        hint = await ai.generate_hint(question)
        return HintResponse(hint=hint)

    except TapolioError as e:
        raise to_http_error(e)
    except Exception:
        logger.exception("Failed to generate hint")
        raise HTTPException(status_code=500, detail="Failed to generate hint")
