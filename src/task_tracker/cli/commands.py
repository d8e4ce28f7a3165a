# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.errors import TaskError
from ..tasks.task_models import MutationResult, Task, TaskFilter, TaskStats

Ask = Callable[[str], str]
CommandHandler = Callable[[AppState, str, Ask], str]

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}

SAVE_WARNING = "Warning: changes could not be saved; they will be lost when you exit."


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, ask: Ask = input) -> str | None:
        """
        Handle a string like "/command args".
        Handlers get everything after the command name as one string, with
        inner spacing left as typed. Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        arg_text = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, arg_text, ask)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----


def format_task_line(index: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"{index}. [{mark}] {task.description} ({task.created_day.isoformat()})"


def format_stats(stats: TaskStats) -> str:
    lines = [
        "Task statistics:",
        f"  Total: {stats.total}",
        f"  Completed: {stats.completed_count} ({stats.completion_percentage}%)",
        f"  Pending: {stats.pending_count}",
    ]
    best = stats.most_productive_day
    if best is not None:
        lines.append(f"  Most productive day: {best.day.isoformat()} ({best.count} tasks)")
    return "\n".join(lines)


def _with_save_status(message: str, result: MutationResult) -> str:
    if result.persisted:
        return message
    return f"{message}\n{SAVE_WARNING}"


# ---- prompts ----


def _choose(ask: Ask, tasks: list[Task], title: str) -> Task | None:
    """Offer a numbered list; Enter or an out-of-range answer selects nothing."""
    lines = [title]
    for i, t in enumerate(tasks, start=1):
        lines.append(format_task_line(i, t))
    lines.append("Number (Enter to cancel): ")
    answer = ask("\n".join(lines)).strip()
    if not answer.isdigit():
        return None
    idx = int(answer)
    if idx < 1 or idx > len(tasks):
        return None
    return tasks[idx - 1]


def _confirm(ask: Ask, question: str) -> bool:
    return ask(f"{question} [y/N]: ").strip().lower() in _YES


# ---- handlers ----


def cmd_help(state: AppState, arg_text: str, ask: Ask) -> str:
    return registry.build_help()


def cmd_status(state: AppState, arg_text: str, ask: Ask) -> str:
    total = len(state.repository)
    pending = len(state.service.list_tasks(TaskFilter.PENDING))
    return (
        "Status:\n"
        f"  Storage: {state.store.describe()}\n"
        f"  Tasks: {total} ({pending} pending)"
    )


def cmd_add(state: AppState, arg_text: str, ask: Ask) -> str:
    description = arg_text if arg_text.strip() else ask("Task description: ")
    try:
        result = state.service.add_task(description)
    except TaskError as e:
        return f"Error: {e}"
    return _with_save_status(f"Task added: {result.task.description}", result)


def cmd_list(state: AppState, arg_text: str, ask: Ask) -> str:
    """
    /list            -> all tasks
    /list completed  -> completed only
    /list pending    -> pending only
    """
    words = arg_text.split()
    try:
        task_filter = TaskFilter.parse(words[0] if words else None)
    except TaskError as e:
        return f"Error: {e}"

    if not len(state.repository):
        return "No tasks yet."

    tasks = state.service.list_tasks(task_filter)
    if not tasks:
        return f"No {task_filter.value} tasks."

    lines = [f"Tasks ({task_filter.value}):"]
    lines.extend(format_task_line(i, t) for i, t in enumerate(tasks, start=1))
    return "\n".join(lines)


def cmd_done(state: AppState, arg_text: str, ask: Ask) -> str:
    pending = state.service.list_tasks(TaskFilter.PENDING)
    if not pending:
        return "No pending tasks - everything is done!"

    task = _choose(ask, pending, "Select a task to mark as completed:")
    if task is None:
        return "No task selected."
    try:
        result = state.service.complete_task(task.id)
    except TaskError as e:
        return f"Error: {e}"
    return _with_save_status(f"Task completed: {task.description}", result)


def cmd_reopen(state: AppState, arg_text: str, ask: Ask) -> str:
    completed = state.service.list_tasks(TaskFilter.COMPLETED)
    if not completed:
        return "No completed tasks."

    task = _choose(ask, completed, "Select a task to mark as pending again:")
    if task is None:
        return "No task selected."
    try:
        result = state.service.reopen_task(task.id)
    except TaskError as e:
        return f"Error: {e}"
    return _with_save_status(f"Task reopened: {task.description}", result)


def cmd_edit(state: AppState, arg_text: str, ask: Ask) -> str:
    tasks = state.service.list_tasks(TaskFilter.ALL)
    if not tasks:
        return "No tasks to edit."

    task = _choose(ask, tasks, "Select a task to edit:")
    if task is None:
        return "No task selected."

    answer = ask(f"New description [{task.description}]: ")
    # Bare Enter keeps the current text; whitespace-only is still rejected.
    new_description = task.description if answer == "" else answer
    try:
        result = state.service.edit_task(task.id, new_description)
    except TaskError as e:
        return f"Error: {e}"
    return _with_save_status(f"Task updated: {result.task.description}", result)


def cmd_delete(state: AppState, arg_text: str, ask: Ask) -> str:
    tasks = state.service.list_tasks(TaskFilter.ALL)
    if not tasks:
        return "No tasks to delete."

    task = _choose(ask, tasks, "Select a task to delete:")
    if task is None:
        return "No task selected."
    if not _confirm(ask, f"Delete {task.description!r}?"):
        return "Deletion cancelled."
    try:
        result = state.service.delete_task(task.id)
    except TaskError as e:
        return f"Error: {e}"
    return _with_save_status(f"Task deleted: {task.description}", result)


def cmd_search(state: AppState, arg_text: str, ask: Ask) -> str:
    if not len(state.repository):
        return "No tasks yet."

    term = arg_text if arg_text.strip() else ask("Search term: ")
    try:
        found = state.service.search_tasks(term)
    except TaskError as e:
        return f"Error: {e}"

    if not found:
        return f'No tasks contain "{term.strip()}".'
    lines = [f"Found {len(found)} task(s):"]
    lines.extend(format_task_line(i, t) for i, t in enumerate(found, start=1))
    return "\n".join(lines)


def cmd_stats(state: AppState, arg_text: str, ask: Ask) -> str:
    if not len(state.repository):
        return "No tasks yet."
    return format_stats(state.service.compute_statistics())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show storage location and task counts.")
registry.register("add", cmd_add, help_text="Add a task: /add <description>.", aliases=["new"])
registry.register(
    "list", cmd_list, help_text="List tasks: /list [all|completed|pending].", aliases=["ls"]
)
registry.register("done", cmd_done, help_text="Mark a pending task as completed.", aliases=["complete"])
registry.register("reopen", cmd_reopen, help_text="Mark a completed task as pending again.")
registry.register("edit", cmd_edit, help_text="Change a task's description.")
registry.register("search", cmd_search, help_text="Find tasks containing text: /search <term>.", aliases=["find"])
registry.register("stats", cmd_stats, help_text="Show task statistics.")
registry.register("delete", cmd_delete, help_text="Delete a task (asks for confirmation).", aliases=["rm"])
