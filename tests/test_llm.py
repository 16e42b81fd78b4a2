import sys
import unittest
from pathlib import Path
from unittest.mock import patch

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from todo_agent.errors import ModelAuthError, ModelServiceError, NetworkError, RateLimitError
from todo_agent.llm import MAX_TOKENS, MODEL, TEMPERATURE, GroqClient

URL = "https://api.groq.com/openai/v1/chat/completions"


def _response(status: int, body: object) -> httpx.Response:
    return httpx.Response(status, json=body, request=httpx.Request("POST", URL))


class _FakeClient:
    def __init__(self, outcomes: list[object]) -> None:
        self.outcomes = outcomes
        self.calls: list[dict] = []

    def post(self, url, **kwargs):
        if len(self.calls) >= len(self.outcomes):
            raise AssertionError("post called more times than expected")
        outcome = self.outcomes[len(self.calls)]
        self.calls.append({"url": url, **kwargs})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class GroqClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.llm = GroqClient(api_key="gsk_test")

    def _generate(self, outcome: object):
        client = _FakeClient([outcome])
        with patch("todo_agent.llm._shared_http_client", return_value=client):
            return self.llm.generate("hello"), client

    def test_request_shape(self) -> None:
        body = {"choices": [{"message": {"content": '{"type": "output", "output": "hi"}'}}]}
        response, client = self._generate(_response(200, body))
        self.assertEqual(response.content, '{"type": "output", "output": "hi"}')
        self.assertEqual(response.model, MODEL)
        call = client.calls[0]
        self.assertEqual(call["url"], URL)
        self.assertEqual(call["headers"], {"Authorization": "Bearer gsk_test"})
        self.assertEqual(
            call["json"],
            {
                "model": "llama-3.3-70b-versatile",
                "messages": [{"role": "user", "content": "hello"}],
                "temperature": TEMPERATURE,
                "max_tokens": MAX_TOKENS,
                "response_format": {"type": "json_object"},
            },
        )

    def test_rate_limit(self) -> None:
        with self.assertRaises(RateLimitError) as ctx:
            self._generate(_response(429, {"error": {"message": "rate limit"}}))
        self.assertEqual(ctx.exception.status_code, 429)

    def test_auth_failure(self) -> None:
        with self.assertRaises(ModelAuthError):
            self._generate(_response(401, {"error": {"message": "invalid api key"}}))

    def test_server_error(self) -> None:
        with self.assertRaises(ModelServiceError) as ctx:
            self._generate(_response(503, {"error": "unavailable"}))
        self.assertNotIsInstance(ctx.exception, RateLimitError)

    def test_network_errors(self) -> None:
        request = httpx.Request("POST", URL)
        for exc in [httpx.ConnectError("refused", request=request), httpx.ReadTimeout("slow", request=request)]:
            with self.assertRaises(NetworkError):
                self._generate(exc)

    def test_other_request_errors_are_network_errors(self) -> None:
        request = httpx.Request("POST", URL)
        for exc in [
            httpx.DecodingError("bad gzip", request=request),
            httpx.TooManyRedirects("loop", request=request),
        ]:
            with self.assertRaises(NetworkError):
                self._generate(exc)

    def test_malformed_body(self) -> None:
        for body in [{}, {"choices": []}, {"choices": [{"message": {"content": None}}]}]:
            with self.assertRaises(ModelServiceError):
                self._generate(_response(200, body))

    def test_no_retry(self) -> None:
        client = _FakeClient([_response(429, {}), _response(200, {})])
        with patch("todo_agent.llm._shared_http_client", return_value=client):
            with self.assertRaises(RateLimitError):
                self.llm.generate("hello")
        self.assertEqual(len(client.calls), 1)


if __name__ == "__main__":
    unittest.main()
