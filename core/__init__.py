"""Core utilities shared by the SDK and the bot layer — currently logging.

This package is framework-agnostic. It must NEVER import from ``bot/`` or ``telebind/``.
"""

from core.logger import TelebindLogger

__all__ = [
    "TelebindLogger",
]
