# src/task_tracker/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import Ask
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")

# Menu number -> command line.
MENU: dict[str, tuple[str, str]] = {
    "1": ("Add a task", "/add"),
    "2": ("List all tasks", "/list all"),
    "3": ("List completed tasks", "/list completed"),
    "4": ("List pending tasks", "/list pending"),
    "5": ("Mark a task as completed", "/done"),
    "6": ("Edit a task", "/edit"),
    "7": ("Search tasks", "/search"),
    "8": ("Show statistics", "/stats"),
    "9": ("Delete a task", "/delete"),
    "10": ("Exit", "/exit"),
}

SEPARATOR = "=" * 50


def render_menu() -> str:
    lines = ["What do you want to do?"]
    for key, (label, _) in MENU.items():
        lines.append(f"  {key:>2}. {label}")
    lines.append("(or type a /command, /help for the full list)")
    return "\n".join(lines)


def resolve_input(user_input: str) -> str | None:
    """Map a menu number or a /command to a command line; None for anything else."""
    if user_input in MENU:
        return MENU[user_input][1]
    if user_input.startswith("/"):
        return user_input
    return None


def run_console_loop(state: AppState, *, ask: Ask = input, out=print) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "task-tracker"))
    out(f"[{app_name}] {len(state.repository)} task(s) loaded. Ready.\n")

    while True:
        out(render_menu())
        try:
            user_input = ask("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            out("")
            break

        if not user_input:
            continue

        line = resolve_input(user_input)
        if line is None:
            out("Invalid option.")
            out(SEPARATOR)
            continue

        if line.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, line, ask=ask)
        except (EOFError, KeyboardInterrupt):
            logger.info("Prompt interrupted; back to menu.")
            reply = "Cancelled."
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            out(reply)
        out(SEPARATOR)

    out(f"Goodbye! Your tasks are stored in {state.store.describe()}.")
    logger.info("Console connector finished.")
