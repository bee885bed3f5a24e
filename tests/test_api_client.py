import pytest
import requests

from services.api_client import TapolioClient, ApiError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body_is_json=True):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._body_is_json = body_is_json

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if not self._body_is_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)


def test_fetch_suggestion_posts_transcript():
    session = FakeSession(FakeResponse(payload={"suggestion": "Hi", "conversation": []}))
    client = TapolioClient("http://api.test/", session=session)

    assert client.fetch_suggestion("what is react?") == {"suggestion": "Hi", "conversation": []}
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api.test/suggest")
    assert kwargs["json"] == {"transcript": "what is react?"}
    assert kwargs["timeout"] == 30


def test_interview_calls_use_camel_case():
    session = FakeSession(FakeResponse(payload={"score": 7}))
    client = TapolioClient("http://api.test", session=session)

    client.submit_answer("abc", "my answer")
    client.request_hint("abc")

    assert session.calls[0][2]["json"] == {"sessionId": "abc", "answer": "my answer"}
    assert session.calls[1][1] == "http://api.test/interview/hint"


def test_server_error_message_is_raised():
    session = FakeSession(FakeResponse(400, {"error": "Missing or invalid transcript"}))
    client = TapolioClient(session=session)

    with pytest.raises(ApiError, match="Missing or invalid transcript") as info:
        client.fetch_suggestion("")
    assert info.value.status_code == 400


def test_non_json_error_body():
    session = FakeSession(FakeResponse(502, body_is_json=False))
    with pytest.raises(ApiError, match="API error: 502"):
        TapolioClient(session=session).start_interview("React")


def test_timeout():
    session = FakeSession(error=requests.Timeout())
    with pytest.raises(ApiError, match="Request timeout - please try again"):
        TapolioClient(session=session).fetch_suggestion("hello?")


def test_check_health():
    assert TapolioClient(session=FakeSession(FakeResponse(200))).check_health() is True
    assert TapolioClient(session=FakeSession(FakeResponse(503))).check_health() is False
    assert TapolioClient(session=FakeSession(error=requests.ConnectionError())).check_health() is False
