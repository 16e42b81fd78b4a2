from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

import httpx

from todo_agent.errors import ModelAuthError, ModelServiceError, NetworkError, RateLimitError

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
MODEL = "llama-3.3-70b-versatile"
TEMPERATURE = 0.7
MAX_TOKENS = 1024


@lru_cache(maxsize=1)
def _shared_http_client() -> httpx.Client:
    return httpx.Client()


@dataclass(frozen=True)
class LLMResponse:
    content: str
    model: str


class LLMClient(Protocol):
    def generate(self, prompt: str) -> LLMResponse:
        ...


def _classify_status_error(exc: httpx.HTTPStatusError) -> ModelServiceError:
    status = exc.response.status_code
    if status == 429:
        return RateLimitError("model service rate limit reached", status_code=status)
    if status in {401, 403}:
        return ModelAuthError("model service rejected the API key", status_code=status)
    return ModelServiceError(f"model service returned HTTP {status}", status_code=status)


@dataclass(frozen=True)
class GroqClient:
    """Chat completions client for Groq's OpenAI-compatible endpoint."""

    api_key: str
    base_url: str = GROQ_BASE_URL
    model: str = MODEL
    timeout_s: float = 60.0

    def generate(self, prompt: str) -> LLMResponse:
        url = f"{self.base_url.rstrip('/')}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
            "response_format": {"type": "json_object"},
        }
        client = _shared_http_client()
        try:
            response = client.post(url, headers=headers, json=payload, timeout=self.timeout_s)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise _classify_status_error(exc) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"request to model service failed: {exc.__class__.__name__}") from exc
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ModelServiceError("model service returned an unexpected body") from exc
        if not isinstance(content, str):
            raise ModelServiceError("model service returned no message content")
        return LLMResponse(content=content, model=self.model)
