from __future__ import annotations

"""
Error types raised by the agent.

Each failure is classified where it happens (tool lookup, response decoding,
model transport) so the chat loop can map it to a fixed operator message
without inspecting exception text.
"""

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."


class AgentError(Exception):
    """Base class for failures that abort a single exchange."""

    user_message = GENERIC_ERROR_MESSAGE


class UnknownToolError(AgentError):
    user_message = "Invalid tool was requested."

    def __init__(self, name: object) -> None:
        super().__init__(f"Invalid Tool Call: {name}")
        self.name = name


class ResponseDecodeError(AgentError):
    user_message = "Failed to parse AI response. Please try again."


class ModelServiceError(AgentError):
    user_message = "API service is temporarily unavailable. Please try again later."

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ModelServiceError):
    pass


class ModelAuthError(ModelServiceError):
    pass


class NetworkError(AgentError):
    user_message = "Network error. Please check your internet connection."


class StepLimitExceeded(AgentError):
    def __init__(self, max_steps: int) -> None:
        super().__init__(f"exchange exceeded {max_steps} model calls")
        self.max_steps = max_steps


class ConfigError(Exception):
    """Startup configuration problem; carries guidance lines for the operator."""

    def __init__(self, message: str, guidance: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.guidance = guidance or []


def user_message_for(exc: BaseException) -> str:
    if isinstance(exc, AgentError):
        return exc.user_message
    return GENERIC_ERROR_MESSAGE
