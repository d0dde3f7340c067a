# src/taskpad/cli/commands.py

from __future__ import annotations

import inspect
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import cast

from ..client.controller import TaskController
from ..client.render import render_board
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandResult = str | None | Awaitable[str | None]
CommandHandler2 = Callable[[TaskController, list[str]], CommandResult]
CommandHandler3 = Callable[[TaskController, list[str], CommandEmitter | None], CommandResult]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

# Commands whose argument is free text (passed as one string).
_RAW_ARG_COMMANDS = {"add", "a", "new"}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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

    async def handle(
        self,
        controller: TaskController,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        # Keep the raw remainder so "/add  buy  milk" keeps its spacing.
        rest = line[1:].lstrip()[len(parts[0]) :].strip()
        args = [rest] if name in _RAW_ARG_COMMANDS and rest else parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            result = cast(CommandHandler3, handler)(controller, args, emit)
        else:
            result = cast(CommandHandler2, handler)(controller, args)

        if inspect.isawaitable(result):
            result = await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Any line without a leading '/' is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task(controller: TaskController, ref: str) -> Task | None:
    """
    Find a task by 1-based position in the filtered list, exact id, or unique id prefix.
    """
    ref = ref.strip()
    if not ref:
        return None

    if ref.isdigit():
        visible = controller.filtered_tasks
        idx = int(ref)
        if 1 <= idx <= len(visible):
            return visible[idx - 1]

    exact = controller.state.find(ref)
    if exact is not None:
        return exact

    matches = [t for t in controller.state.tasks if t.id.startswith(ref.lower())]
    return matches[0] if len(matches) == 1 else None


def cmd_help(controller: TaskController, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(controller: TaskController, args: list[str]) -> str:
    color = controller.color if controller.color is not None else sys.stdout.isatty()
    return render_board(controller.state, color=color)


async def cmd_add(
    controller: TaskController,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /add <text>  -> create a task from <text>
    /add         -> submit the current draft
    """
    if args:
        controller.set_draft(args[0])
    task = await controller.add()
    if task is None:
        if controller.state.notice:
            return controller.state.notice
        return "Nothing to add (empty text)."
    return f"Added: {task.text}"


async def cmd_toggle(controller: TaskController, args: list[str]) -> str:
    if not args:
        return "Usage: /toggle <n|id>"
    task = resolve_task(controller, args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    updated = await controller.toggle(task.id)
    if updated is None:
        return controller.state.notice or "Toggle failed."
    return f"{'Completed' if updated.completed else 'Reopened'}: {updated.text}"


async def cmd_remove(controller: TaskController, args: list[str]) -> str:
    """
    /rm <n|id>  -> delete a completed task (active tasks must be completed first)
    """
    if not args:
        return "Usage: /rm <n|id>"
    task = resolve_task(controller, args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    if not task.completed:
        return "Only completed tasks can be deleted. Use /toggle first."
    if not await controller.remove(task.id):
        return controller.state.notice or "Delete failed."
    return f"Deleted: {task.text}"


def cmd_filter(controller: TaskController, args: list[str]) -> str:
    if not args:
        return f"Filter is {controller.state.filter.value}. Use /filter all|active|completed."
    try:
        selected = controller.set_filter(args[0])
    except ValueError as e:
        return str(e)
    return f"Filter: {selected.value}"


def cmd_theme(controller: TaskController, args: list[str]) -> str:
    return f"Theme: {controller.toggle_theme().value}"


async def cmd_reload(
    controller: TaskController,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if emit:
        emit("Reloading tasks...")
    if not await controller.load():
        return controller.state.notice or "Reload failed."
    return f"Loaded {len(controller.state.tasks)} tasks."


def cmd_state(controller: TaskController, args: list[str]) -> str:
    return json.dumps(controller.state.to_dict(), ensure_ascii=False, indent=2)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the board.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a", "new"])
registry.register("toggle", cmd_toggle, help_text="Complete/reopen: /toggle <n|id>.", aliases=["t", "done"])
registry.register("rm", cmd_remove, help_text="Delete a completed task: /rm <n|id>.", aliases=["del"])
registry.register(
    "filter", cmd_filter, help_text="Filter the list: /filter all | active | completed.", aliases=["f"]
)
registry.register("theme", cmd_theme, help_text="Switch light/dark theme.")
registry.register("reload", cmd_reload, help_text="Reload tasks from the server.")
registry.register("state", cmd_state, help_text="Dump client state as JSON.")
