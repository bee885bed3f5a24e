from pydantic import BaseModel
from typing import Optional, List

MAX_TRANSCRIPT_LENGTH = 5000


class SuggestRequest(BaseModel):
    transcript: Optional[str] = None


class ConversationEntry(BaseModel):
    question: str
    answer: str


class SuggestResponse(BaseModel):
    suggestion: str
    conversation: List[ConversationEntry]


class ResetResponse(BaseModel):
    success: bool
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
