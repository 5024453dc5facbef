"""Bot application layer — command registry and update dispatch.

This package may import from ``core/``, ``telebind/`` and ``config`` only.
"""

from bot.dispatcher import process_update
from bot.registry import CommandEntry, CommandRegistry, registry

__all__ = [
    # Dispatcher
    "process_update",
    # Registry
    "CommandEntry",
    "CommandRegistry",
    "registry",
]
