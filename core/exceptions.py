from typing import Optional, Dict, Any


class TapolioError(Exception):
    """
    Base class for every error the server raises on purpose.

    Attributes:
        code (str): short identifier, e.g. 'SESSION_NOT_FOUND'
        message (str): human readable message, safe to return to clients
        details (dict): extra context for server-side logs only
    """
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code}] {message}")


class ConfigurationError(TapolioError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="CONFIG_ERROR", message=message, details=details)


class SessionNotFoundError(TapolioError):
    def __init__(self, session_id: str):
        super().__init__(
            code="SESSION_NOT_FOUND",
            message="Session not found",
            details={"session_id": session_id}
        )


class SessionLimitError(TapolioError):
    def __init__(self, client_id: str, limit: int):
        super().__init__(
            code="SESSION_LIMIT",
            message="Too many active sessions. Please complete or wait for existing sessions to expire.",
            details={"client_id": client_id, "limit": limit}
        )


class HintAlreadyUsedError(TapolioError):
    def __init__(self, session_id: str, question_number: int):
        super().__init__(
            code="HINT_ALREADY_USED",
            message="Hint already used for this question",
            details={"session_id": session_id, "question_number": question_number}
        )


class InterviewCompleteError(TapolioError):
    def __init__(self, session_id: str):
        super().__init__(
            code="INTERVIEW_COMPLETE",
            message="Interview already complete",
            details={"session_id": session_id}
        )


class QuestionAlreadyAnsweredError(TapolioError):
    def __init__(self, session_id: str, question_number: int):
        super().__init__(
            code="QUESTION_ALREADY_ANSWERED",
            message="Question already answered",
            details={"session_id": session_id, "question_number": question_number}
        )
