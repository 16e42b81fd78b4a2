import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from todo_agent.errors import ConfigError

API_KEY_PLACEHOLDER = "your-groq-api-key-here"
DEVELOPMENT_ENV = "development"


@dataclass(frozen=True)
class Settings:
    groq_api_key: str
    database_url: str
    development: bool = False
    max_steps: int | None = None


def load_env_file(path: Path | None = None) -> None:
    load_dotenv(dotenv_path=path or Path.cwd() / ".env", override=False)


def _parse_max_steps(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(
            f"TODO_AGENT_MAX_STEPS must be an integer, got {raw!r}",
            ["Unset TODO_AGENT_MAX_STEPS or set it to a positive number."],
        ) from exc
    if value < 1:
        raise ConfigError(
            "TODO_AGENT_MAX_STEPS must be at least 1",
            ["Unset TODO_AGENT_MAX_STEPS or set it to a positive number."],
        )
    return value


def load_database_url(environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    database_url = (env.get("DATABASE_URL") or "").strip()
    if not database_url:
        raise ConfigError(
            "DATABASE_URL is not set in .env file",
            ["Please ensure your .env file has the DATABASE_URL configured"],
        )
    return database_url


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    api_key = (env.get("GROQ_API_KEY") or "").strip()
    if not api_key or api_key == API_KEY_PLACEHOLDER:
        raise ConfigError(
            "GROQ_API_KEY is not set in .env file",
            [
                "1. Copy .env.example to .env",
                "2. Get your API key from https://console.groq.com/keys",
                "3. Add your API key to the .env file",
            ],
        )
    return Settings(
        groq_api_key=api_key,
        database_url=load_database_url(env),
        development=(env.get("APP_ENV") or "").strip().lower() == DEVELOPMENT_ENV,
        max_steps=_parse_max_steps(env.get("TODO_AGENT_MAX_STEPS")),
    )
