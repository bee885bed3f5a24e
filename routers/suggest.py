from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Depends

from core.dependencies import get_interview_ai, get_conversation
from core.logging_config import get_logger
from models.suggest import (
    MAX_TRANSCRIPT_LENGTH, SuggestRequest, SuggestResponse, ResetResponse, HealthResponse
)
from services.conversation import ConversationLog, normalize_question
from services.interview_ai import InterviewAI

logger = get_logger(__name__)

router = APIRouter(tags=["Suggest"])
reset_router = APIRouter(tags=["Suggest"])


@router.post("/suggest", response_model=SuggestResponse)
async def suggest(
    request: SuggestRequest,
    ai: InterviewAI = Depends(get_interview_ai),
    conversation: ConversationLog = Depends(get_conversation)
):
    """
    Detect the latest question in a speech transcript and answer it.
    Repeated questions are served from the conversation log.
    """
    if not request.transcript:
        raise HTTPException(status_code=400, detail="Missing or invalid transcript")
    if len(request.transcript) > MAX_TRANSCRIPT_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Transcript too long (max {MAX_TRANSCRIPT_LENGTH} characters)"
        )

    try:
        trimmed = request.transcript.strip()
        logger.info(f"Received transcript: \"{trimmed}\"")

        question = await ai.detect_question(trimmed)
        if question is None:
            logger.info("Not a question, ignoring")
            return {"suggestion": "", "conversation": conversation.entries()}

        previous = conversation.find(question)
        if previous is not None:
            return {"suggestion": previous, "conversation": conversation.entries()}

        entry_question = normalize_question(question)
        answer = await ai.answer_question(entry_question)
        logger.info(f"OpenAI answered:\n{answer}\n")

        conversation.add(entry_question, answer)
        return {"suggestion": answer, "conversation": conversation.entries()}

    except HTTPException:
        raise
    except Exception:
        logger.exception("Suggest failed")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@reset_router.post("/reset", response_model=ResetResponse)
async def reset(conversation: ConversationLog = Depends(get_conversation)):
    conversation.clear()
    return {"success": True, "message": "Conversation history cleared"}
