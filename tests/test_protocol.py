import json
import sys
import unittest
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from todo_agent.models import TodoRecord
from todo_agent.tools.protocol import (
    Action,
    Observation,
    Output,
    Plan,
    UnknownMessage,
    format_observation,
    parse_agent_message,
)


class ParseAgentMessageTests(unittest.TestCase):
    def test_plan(self) -> None:
        message, error = parse_agent_message('{"type": "plan", "plan": "Look up todos."}')
        self.assertIsNone(error)
        self.assertEqual(message, Plan(plan="Look up todos."))

    def test_action_keeps_input_verbatim(self) -> None:
        text = json.dumps({"type": "action", "function": "deleteTodoById", "input": {"id": [1, 2]}})
        message, error = parse_agent_message(text)
        self.assertIsNone(error)
        self.assertIsInstance(message, Action)
        self.assertEqual(message.function, "deleteTodoById")
        self.assertEqual(message.input, {"id": [1, 2]})

    def test_action_without_input(self) -> None:
        message, _ = parse_agent_message('{"type": "action", "function": "getAllTodos"}')
        self.assertEqual(message, Action(function="getAllTodos", input=None))
        self.assertEqual(message.describe(), "getAllTodos(null)")

    def test_output_and_observation(self) -> None:
        message, _ = parse_agent_message('{"type": "output", "output": "All done"}')
        self.assertEqual(message, Output(output="All done"))
        message, _ = parse_agent_message('{"type": "observation", "observation": 3}')
        self.assertEqual(message, Observation(observation=3))

    def test_unknown_tag(self) -> None:
        message, error = parse_agent_message('{"type": "user", "user": "hi"}')
        self.assertIsNone(error)
        self.assertIsInstance(message, UnknownMessage)
        self.assertEqual(message.type, "user")

    def test_rejects_invalid_payloads(self) -> None:
        for text in ["", "   ", "not json", "[1, 2]", '"plan"', "{}", '{"type": 5}', '{"type": ""}']:
            message, error = parse_agent_message(text)
            self.assertIsNone(message, text)
            self.assertIsNotNone(error, text)

    def test_surrounding_whitespace_is_ignored(self) -> None:
        message, error = parse_agent_message('\n  {"type": "output", "output": "ok"}\n')
        self.assertIsNone(error)
        self.assertEqual(message, Output(output="ok"))


class FormatObservationTests(unittest.TestCase):
    def test_records_are_serialized(self) -> None:
        record = TodoRecord(
            id=4,
            text="buy milk",
            created_at=datetime(2026, 1, 2, 3, 4, 5),
            updated_at=datetime(2026, 1, 2, 3, 4, 5),
        )
        payload = json.loads(format_observation([record]))
        self.assertEqual(payload["type"], "observation")
        self.assertEqual(
            payload["observation"],
            [
                {
                    "id": 4,
                    "todo": "buy milk",
                    "created_at": "2026-01-02T03:04:05",
                    "updated_at": "2026-01-02T03:04:05",
                }
            ],
        )

    def test_scalar_and_none_results(self) -> None:
        self.assertEqual(json.loads(format_observation(7))["observation"], 7)
        self.assertEqual(format_observation(None), '{"type": "observation"}')
        self.assertEqual(json.loads(format_observation([]))["observation"], [])
        self.assertEqual(json.loads(format_observation(0))["observation"], 0)


if __name__ == "__main__":
    unittest.main()
