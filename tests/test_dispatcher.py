"""Tests for the command registry and update dispatcher."""

import sys
import os
from unittest.mock import AsyncMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from bot.dispatcher import process_update
from bot.registry import CommandRegistry, registry
from telebind.command import Command
from telebind.models import BotCommand


def _update(text: str, command_length: int = 0, field: str = "message") -> dict:
    message = {"message_id": 1, "date": 0, "chat": {"id": 1, "type": "private"}, "text": text}
    if command_length:
        message["entities"] = [{"type": "bot_command", "offset": 0, "length": command_length}]
    return {"update_id": 100, field: message}


@pytest.fixture
def echo_handler():
    handler = AsyncMock()
    registry.register("/echo", description="Echo the arguments back")(handler)
    yield handler
    registry.unregister("/echo")


# ── Registry ─────────────────────────────────────────────────────────────────


class TestCommandRegistry:
    """Validate registration and lookup."""

    def test_singleton(self) -> None:
        assert CommandRegistry() is registry

    def test_register_adds_slash(self, echo_handler) -> None:
        registry.register("ping", description="Check the bot")(echo_handler)
        try:
            assert registry.get("/ping") is not None
        finally:
            registry.unregister("ping")
        assert registry.get("/ping") is None

    def test_entries_is_a_copy(self, echo_handler) -> None:
        registry.entries().clear()
        assert registry.get("/echo") is not None

    def test_bot_commands(self, echo_handler) -> None:
        assert BotCommand(command="echo", description="Echo the arguments back") in registry.bot_commands()


# ── Dispatcher ───────────────────────────────────────────────────────────────


class TestProcessUpdate:
    """Validate update → command → handler routing."""

    @pytest.mark.asyncio
    async def test_dispatches_command(self, echo_handler) -> None:
        handled = await process_update(_update("/echo 'a b' c", 5))
        assert handled is True
        echo_handler.assert_awaited_once()
        command = echo_handler.await_args.args[0]
        assert isinstance(command, Command)
        assert command.args == ["a b", "c"]

    @pytest.mark.asyncio
    async def test_edited_message(self, echo_handler) -> None:
        assert await process_update(_update("/echo", 5, field="edited_message")) is True

    @pytest.mark.asyncio
    async def test_plain_text_falls_through(self, echo_handler) -> None:
        assert await process_update(_update("hello")) is False
        echo_handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_command(self, echo_handler) -> None:
        assert await process_update(_update("/nope", 5)) is False
        echo_handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_mismatched_quotes_is_not_a_command(self, echo_handler) -> None:
        assert await process_update(_update("/echo 'oops", 5)) is False
        echo_handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_update(self) -> None:
        assert await process_update({"message": {}}) is False

    @pytest.mark.asyncio
    async def test_no_message(self) -> None:
        assert await process_update({"update_id": 1}) is False
