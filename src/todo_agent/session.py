from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from todo_agent.tools.protocol import format_observation, format_user_message


class EntryKind(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    OBSERVATION = "observation"


_LABELS = {
    EntryKind.USER: "User",
    EntryKind.ASSISTANT: "Assistant",
    EntryKind.OBSERVATION: "Observation",
}


@dataclass(frozen=True)
class TranscriptEntry:
    kind: EntryKind
    content: str

    def render(self) -> str:
        return f"{_LABELS[self.kind]}: {self.content}"


@dataclass
class Session:
    """Conversation state for one chat run. Entries are only ever appended."""

    entries: list[TranscriptEntry] = field(default_factory=list)

    def append_user(self, user_input: str) -> TranscriptEntry:
        return self._append(EntryKind.USER, format_user_message(user_input))

    def append_assistant(self, raw_response: str) -> TranscriptEntry:
        return self._append(EntryKind.ASSISTANT, raw_response)

    def append_observation(self, value: Any) -> TranscriptEntry:
        return self._append(EntryKind.OBSERVATION, format_observation(value))

    def _append(self, kind: EntryKind, content: str) -> TranscriptEntry:
        entry = TranscriptEntry(kind=kind, content=content)
        self.entries.append(entry)
        return entry

    def render(self) -> str:
        return "\n".join(entry.render() for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)
