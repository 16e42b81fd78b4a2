from todo_agent.tools.protocol import Action, AgentMessage, Observation, Output, Plan, UnknownMessage
from todo_agent.tools.registry import ToolDefinition, ToolName, ToolRegistry, build_default_registry

__all__ = [
    "Action",
    "AgentMessage",
    "Observation",
    "Output",
    "Plan",
    "UnknownMessage",
    "ToolDefinition",
    "ToolName",
    "ToolRegistry",
    "build_default_registry",
]
