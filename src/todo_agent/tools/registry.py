from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from todo_agent.db import TodoStore
from todo_agent.errors import UnknownToolError


Handler = Callable[[Any], Any]


class ToolName(str, Enum):
    GET_ALL_TODOS = "getAllTodos"
    CREATE_TODO = "createTodo"
    DELETE_TODO_BY_ID = "deleteTodoById"
    SEARCH_TODO = "searchTodo"


@dataclass(frozen=True)
class ToolDefinition:
    name: ToolName
    signature: str
    description: str
    handle: Handler


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[ToolName, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> None:
        self._tools[definition.name] = definition

    def resolve(self, name: str) -> ToolDefinition:
        try:
            key = ToolName(name)
        except ValueError:
            raise UnknownToolError(name) from None
        definition = self._tools.get(key)
        if definition is None:
            raise UnknownToolError(name)
        return definition

    def list_tools(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def describe_tools(self) -> str:
        lines: list[str] = []
        for index, tool in enumerate(self.list_tools(), start=1):
            lines.append(f"{index}. {tool.signature}: {tool.description}")
        return "\n".join(lines)


def build_default_registry(store: TodoStore) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(
        ToolDefinition(
            name=ToolName.GET_ALL_TODOS,
            signature="getAllTodos()",
            description="Returns all the todos from Database",
            handle=lambda _input: store.list_all(),
        )
    )
    registry.register(
        ToolDefinition(
            name=ToolName.CREATE_TODO,
            signature="createTodo(todo: string)",
            description=(
                "Creates a new Todo in the DB and takes todo as a string "
                "and returns the ID of created todo"
            ),
            handle=store.create,
        )
    )
    registry.register(
        ToolDefinition(
            name=ToolName.DELETE_TODO_BY_ID,
            signature="deleteTodoById(id: number)",
            description="Deletes the todo by ID given in the DB",
            handle=store.delete_by_id,
        )
    )
    registry.register(
        ToolDefinition(
            name=ToolName.SEARCH_TODO,
            signature="searchTodo(query: string)",
            description="Searches for all todos matching the query string using ilike",
            handle=store.search,
        )
    )
    return registry
