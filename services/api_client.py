import os
from typing import Optional

import requests

API_BASE_URL = os.getenv("TAPOLIO_API_BASE_URL", "http://localhost:4000")
REQUEST_TIMEOUT_SECONDS = 30


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class TapolioClient:
    """
    Thin HTTP client for the Tapolio server, mirroring what the web app calls.

    Every request aborts after `timeout` seconds. Non-2xx responses raise
    ApiError carrying the server's `error` message.
    """

    def __init__(self, base_url: str = API_BASE_URL, timeout: float = REQUEST_TIMEOUT_SECONDS,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs
            )
        except requests.Timeout as e:
            raise ApiError("Request timeout - please try again") from e

        if not response.ok:
            try:
                message = response.json().get("error")
            except ValueError:
                message = None
            raise ApiError(message or f"API error: {response.status_code}", response.status_code)

        return response.json()

    def fetch_suggestion(self, transcript: str) -> dict:
        return self._request("POST", "/suggest", json={"transcript": transcript})

    def check_health(self) -> bool:
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        except requests.RequestException:
            return False
        return response.ok

    def reset_conversation(self) -> dict:
        return self._request("POST", "/reset")

    def start_interview(self, technology: str) -> dict:
        return self._request("POST", "/interview/start", json={"technology": technology})

    def submit_answer(self, session_id: str, answer: str) -> dict:
        return self._request("POST", "/interview/answer", json={"sessionId": session_id, "answer": answer})

    def request_hint(self, session_id: str) -> dict:
        return self._request("POST", "/interview/hint", json={"sessionId": session_id})
