from typing import Optional
from models.base import CamelModel

GENERAL_KNOWLEDGE = "General Knowledge"

ALLOWED_TECHNOLOGIES = (
    "React",
    "Angular",
    "Product Owner",
    "Product Manager",
    "Business Analysis",
    "QA Tester",
    "Solution Architect",
    "Scrum Master",
    "DevOps Engineer",
    "Data Analyst",
    GENERAL_KNOWLEDGE,
    "Java Developer",
    "ServiceNow Developer",
    "Python Developer",
    "Node.js Developer",
    "SQL Developer",
    "AWS Solutions Architect",
)

GENERAL_KNOWLEDGE_QUESTIONS = 3
DEFAULT_QUESTIONS = 5

MAX_ANSWER_LENGTH = 5000
MAX_SESSION_ID_LENGTH = 50


def question_count_for(technology: str) -> int:
    if technology == GENERAL_KNOWLEDGE:
        return GENERAL_KNOWLEDGE_QUESTIONS
    return DEFAULT_QUESTIONS


class InterviewStart(CamelModel):
    technology: Optional[str] = None


class InterviewStartResponse(CamelModel):
    session_id: str
    first_question: str


class AnswerSubmit(CamelModel):
    session_id: Optional[str] = None
    answer: Optional[str] = None


class InterviewFeedback(CamelModel):
    score: int
    feedback: str
    next_question: Optional[str]
    complete: bool


class HintRequest(CamelModel):
    session_id: Optional[str] = None


class HintResponse(CamelModel):
    hint: str
