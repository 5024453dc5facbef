"""Command registry — single source of truth for command → handler mapping.

Handlers are bound to a slash-command with a decorator and receive the parsed
:class:`~telebind.command.Command`.  The same registry drives dispatching and
the list published to Telegram with ``setMyCommands``.

Usage::

    from bot.registry import registry

    @registry.register("/ping", description="Check the bot is alive")
    async def handle_ping(command: Command) -> None: ...
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Coroutine, Any

from telebind.command import Command
from telebind.models import BotCommand

logger = logging.getLogger("telebind.bot.registry")

# ── Handler type ─────────────────────────────────────────────────────────────

HandlerFunc = Callable[[Command], Coroutine[Any, Any, None]]


# ── Registry entry ───────────────────────────────────────────────────────────

@dataclasses.dataclass(frozen=True, slots=True)
class CommandEntry:
    """Metadata for a single registered slash-command."""
    command: str              # e.g. "/start"
    description: str          # shown in the Telegram command menu
    handler: HandlerFunc      # the async callable


# ── Registry ─────────────────────────────────────────────────────────────────

class CommandRegistry:
    """Singleton command registry keyed by ``/name``."""

    _instance: CommandRegistry | None = None
    _entries: dict[str, CommandEntry]

    def __new__(cls) -> CommandRegistry:
        if cls._instance is None:
            inst = super().__new__(cls)
            inst._entries = {}
            cls._instance = inst
        return cls._instance

    # ── decorator ────────────────────────────────────────────────────────

    def register(self, command: str, *, description: str) -> Callable[[HandlerFunc], HandlerFunc]:
        """Decorator that registers *handler* for *command*.

        The leading ``/`` is optional; entries are always stored with it.
        """
        name = command if command.startswith("/") else f"/{command}"

        def decorator(func: HandlerFunc) -> HandlerFunc:
            self._entries[name] = CommandEntry(command=name, description=description, handler=func)
            return func
        return decorator

    def unregister(self, command: str) -> None:
        """Remove *command* if registered; unknown names are ignored."""
        self._entries.pop(command if command.startswith("/") else f"/{command}", None)

    # ── lookup helpers ───────────────────────────────────────────────────

    def get(self, command: str) -> CommandEntry | None:
        """Return the entry for *command*, or ``None``."""
        return self._entries.get(command)

    def entries(self) -> dict[str, CommandEntry]:
        """Return a *read-only* view of all registered commands."""
        return dict(self._entries)

    def bot_commands(self) -> list[BotCommand]:
        """Build the command menu for :class:`~telebind.methods.SetMyCommands`."""
        return [
            BotCommand(command=entry.command.lstrip("/"), description=entry.description)
            for entry in self._entries.values()
        ]

    async def dispatch(self, command: Command) -> bool:
        """Look up *command* and invoke its handler.

        Returns ``True`` if a handler was found and called, ``False`` otherwise.
        """
        entry = self._entries.get(command.name)
        if entry is None:
            logger.debug("No handler registered", extra={"command": command.name})
            return False
        await entry.handler(command)
        return True


# Module-level singleton — import this everywhere.
registry = CommandRegistry()
