from __future__ import annotations

"""
Conversational control loop.

The AgentLoop reads operator lines, appends them to the session transcript and
then alternates between model turns and tool calls until the model produces an
`output` message. Any failure during an exchange is reported with a fixed
operator message and control returns to the prompt.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from rich.console import Console
from rich.markup import escape

from todo_agent.errors import ResponseDecodeError, StepLimitExceeded, user_message_for
from todo_agent.llm import LLMClient
from todo_agent.prompting import build_prompt
from todo_agent.session import Session
from todo_agent.tools.protocol import Action, Output, Plan, parse_agent_message
from todo_agent.tools.registry import ToolRegistry

PROMPT = ">> "
BANNER = "🤖 AI To-Do Assistant Ready! Type 'exit' to quit.\n"
FAREWELL = "👋 Goodbye!"
EXIT_COMMAND = "exit"


class LoopState(str, Enum):
    AWAIT_USER_INPUT = "await_user_input"
    AWAIT_MODEL = "await_model"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class ExchangeResult:
    output: str | None
    model_calls: int
    tool_calls: int
    error: str | None = None


class StepBudget:
    """
    Counts model calls within one exchange. With `max_steps` unset the budget
    never runs out.
    """

    def __init__(self, max_steps: int | None = None) -> None:
        self.max_steps = max_steps
        self.iteration = 0

    def consume(self) -> None:
        if self.max_steps is not None and self.iteration >= self.max_steps:
            raise StepLimitExceeded(self.max_steps)
        self.iteration += 1


def is_exit_command(text: str) -> bool:
    return text.strip().lower() == EXIT_COMMAND


class AgentLoop:
    def __init__(
        self,
        llm: LLMClient,
        registry: ToolRegistry,
        session: Session | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
        max_steps: int | None = None,
        debug: bool = False,
    ) -> None:
        self.llm = llm
        self.registry = registry
        self.session = session if session is not None else Session()
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.max_steps = max_steps
        self.debug = debug
        self.state = LoopState.AWAIT_USER_INPUT
        self._tool_descriptions = registry.describe_tools()

    def run(self, read_input: Callable[[str], str]) -> None:
        """Prompt for lines until the operator types `exit` or input ends."""
        self.console.print(BANNER)
        while self.state is not LoopState.TERMINAL:
            try:
                user_input = read_input(PROMPT)
            except EOFError:
                user_input = EXIT_COMMAND
            if is_exit_command(user_input):
                self.console.print(FAREWELL)
                self.state = LoopState.TERMINAL
                break
            if not user_input.strip():
                continue
            self.run_exchange(user_input)

    def run_exchange(self, user_input: str) -> ExchangeResult:
        self.session.append_user(user_input)
        self.state = LoopState.AWAIT_MODEL
        budget = StepBudget(self.max_steps)
        tool_calls = 0
        try:
            while True:
                budget.consume()
                prompt = build_prompt(self.session, self._tool_descriptions)
                response = self.llm.generate(prompt)
                self.session.append_assistant(response.content)
                message, error = parse_agent_message(response.content)
                if message is None:
                    raise ResponseDecodeError(error or "unparseable response")

                if isinstance(message, Output):
                    self.console.print(f"🤖: {escape(message.output)}\n")
                    return ExchangeResult(
                        output=message.output, model_calls=budget.iteration, tool_calls=tool_calls
                    )
                if isinstance(message, Plan):
                    self.console.print(f"💭 Planning: {escape(message.plan)}")
                elif isinstance(message, Action):
                    tool = self.registry.resolve(message.function)
                    self.console.print(f"🔧 Action: {escape(message.describe())}")
                    observation = tool.handle(message.input)
                    tool_calls += 1
                    self.session.append_observation(observation)
                # Observation and unknown tags from the model are ignored.
        except Exception as exc:
            message_text = user_message_for(exc)
            self.err_console.print(f"❌ Error: {message_text}\n")
            if self.debug:
                self.err_console.print("Debug details:")
                self.err_console.print_exception()
            return ExchangeResult(
                output=None, model_calls=budget.iteration, tool_calls=tool_calls, error=message_text
            )
        finally:
            self.state = LoopState.AWAIT_USER_INPUT
