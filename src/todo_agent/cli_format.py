"""Rich formatting helpers for todo-agent CLI output."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from rich.markup import escape
from rich.table import Table

from todo_agent.models import TodoRecord


def truncate(text: str | None, max_len: int = 80) -> str:
    """Safely truncate text with an ellipsis."""
    if not text:
        return ""
    text = str(text).replace("\n", " ").strip()
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")


def todos_table(records: Sequence[TodoRecord], title: str = "Todos") -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Todo")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")
    for record in records:
        table.add_row(
            str(record.id),
            escape(truncate(record.text)),
            format_timestamp(record.created_at),
            format_timestamp(record.updated_at),
        )
    if not records:
        table.caption = "No todos found."
    return table
