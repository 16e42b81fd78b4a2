from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class Plan:
    kind: ClassVar[str] = "plan"
    plan: str


@dataclass(frozen=True)
class Action:
    kind: ClassVar[str] = "action"
    function: str
    input: Any = None

    def describe(self) -> str:
        return f"{self.function}({json.dumps(self.input, default=str)})"


@dataclass(frozen=True)
class Observation:
    kind: ClassVar[str] = "observation"
    observation: Any


@dataclass(frozen=True)
class Output:
    kind: ClassVar[str] = "output"
    output: str


@dataclass(frozen=True)
class UnknownMessage:
    """A well-formed message whose type tag the loop has no behaviour for."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict)


AgentMessage = Union[Plan, Action, Observation, Output, UnknownMessage]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def parse_agent_message(text: str) -> tuple[AgentMessage | None, str | None]:
    raw_text = text.strip()
    if not raw_text:
        return None, "empty response"
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        return None, f"invalid json: {exc}"
    if not isinstance(payload, dict):
        return None, "response must be a json object"
    tag = payload.get("type")
    if not isinstance(tag, str) or not tag.strip():
        return None, "type must be a non-empty string"
    if tag == Plan.kind:
        return Plan(plan=_text(payload.get("plan"))), None
    if tag == Action.kind:
        return Action(function=_text(payload.get("function")), input=payload.get("input")), None
    if tag == Observation.kind:
        return Observation(observation=payload.get("observation")), None
    if tag == Output.kind:
        return Output(output=_text(payload.get("output"))), None
    return UnknownMessage(type=tag, payload=payload), None


def to_jsonable(value: Any) -> Any:
    """Convert tool results (records, lists of records) into plain JSON values."""
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    as_dict = getattr(value, "as_dict", None)
    if callable(as_dict):
        return as_dict()
    return value


def format_user_message(user_input: str) -> str:
    return json.dumps({"type": "user", "user": user_input}, ensure_ascii=False)


def format_observation(value: Any) -> str:
    payload: dict[str, Any] = {"type": "observation"}
    # Tools with no result (deleteTodoById) leave the key out.
    if value is not None:
        payload["observation"] = to_jsonable(value)
    return json.dumps(payload, ensure_ascii=False, default=str)
