from __future__ import annotations

import json
import sqlite3
from typing import NoReturn, Optional

import psycopg
import typer
from rich.console import Console
from rich.markup import escape

from todo_agent.agent_loop import AgentLoop
from todo_agent.cli_format import todos_table
from todo_agent.config import load_database_url, load_env_file, load_settings
from todo_agent.db import TodoStore, open_store
from todo_agent.errors import ConfigError
from todo_agent.llm import GroqClient
from todo_agent.session import Session
from todo_agent.tools.protocol import to_jsonable
from todo_agent.tools.registry import build_default_registry

app = typer.Typer(help="AI To-Do assistant CLI")
err_console = Console(stderr=True)


def _fail_config(exc: ConfigError) -> NoReturn:
    err_console.print(f"❌ Error: {exc.message}")
    if exc.guidance:
        err_console.print("📝 Please follow these steps:")
        for line in exc.guidance:
            err_console.print(f"   {line}")
    raise typer.Exit(code=1)


def _open_store_or_exit(database_url: str, debug: bool = False) -> TodoStore:
    try:
        return open_store(database_url)
    except ConfigError as exc:
        _fail_config(exc)
    except (sqlite3.Error, psycopg.Error, OSError) as exc:
        err_console.print("❌ Error: Could not connect to the database.")
        err_console.print("📝 Please check the DATABASE_URL in your .env file")
        if debug:
            err_console.print(f"Debug details: {exc!r}")
        raise typer.Exit(code=1) from exc


@app.command()
def chat(
    debug: bool = typer.Option(False, "--debug", help="Print full error details."),
    max_steps: Optional[int] = typer.Option(
        None, "--max-steps", min=1, help="Maximum model calls per request (default: unlimited)."
    ),
) -> None:
    """Start the interactive to-do assistant."""
    load_env_file()
    try:
        settings = load_settings()
    except ConfigError as exc:
        _fail_config(exc)
    debug = debug or settings.development
    store = _open_store_or_exit(settings.database_url, debug=debug)
    console = Console()
    loop = AgentLoop(
        llm=GroqClient(api_key=settings.groq_api_key),
        registry=build_default_registry(store),
        session=Session(),
        console=console,
        err_console=err_console,
        max_steps=max_steps if max_steps is not None else settings.max_steps,
        debug=debug,
    )
    loop.run(console.input)


@app.command()
def todos(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Only show todos containing this text."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """Show the stored todos."""
    load_env_file()
    try:
        database_url = load_database_url()
    except ConfigError as exc:
        _fail_config(exc)
    store = _open_store_or_exit(database_url)
    records = store.search(search) if search else store.list_all()
    if as_json:
        typer.echo(json.dumps(to_jsonable(records), indent=2))
        return
    title = f"Todos matching '{escape(search)}'" if search else "Todos"
    Console().print(todos_table(records, title=title))
