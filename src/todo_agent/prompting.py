from __future__ import annotations

from todo_agent.prompts import AGENT_RULES, RESPONSE_INSTRUCTION, TODO_DB_SCHEMA, WORKED_EXAMPLE
from todo_agent.session import Session


def build_instructions(tool_descriptions: str) -> str:
    parts: list[str] = []
    parts.append(AGENT_RULES)
    parts.append("")
    parts.append(TODO_DB_SCHEMA)
    parts.append("")
    parts.append("Available tools:")
    parts.append(tool_descriptions)
    parts.append("")
    parts.append(WORKED_EXAMPLE)
    return "\n".join(parts)


def build_prompt(session: Session, tool_descriptions: str) -> str:
    # The full history is sent every turn; nothing is trimmed.
    parts: list[str] = []
    parts.append(build_instructions(tool_descriptions))
    parts.append("\nConversation History:")
    parts.append(session.render())
    parts.append(f"\n{RESPONSE_INSTRUCTION}")
    return "\n".join(parts)
