"""Update dispatcher.

Turns a raw Telegram update into a :class:`~telebind.command.Command` and
routes it through :data:`bot.registry.registry`.  Receiving updates (long
polling or a webhook server) is left to the caller.
"""

from pydantic import ValidationError

from core.logger import TelebindLogger
from telebind.command import Command
from telebind.exceptions import CommandError
from telebind.models import Update
from bot.registry import registry

logger = TelebindLogger.get_logger()


async def process_update(update: dict) -> bool:
    """Dispatch a single Telegram update to its command handler.

    Returns ``True`` when a registered handler ran.  Updates without a
    message, messages that are not commands and unknown commands all return
    ``False``.
    """
    update_id = update.get("update_id")

    # ── Parse raw dict into the Update model ─────────────────────────────
    try:
        parsed = Update.model_validate(update)
    except ValidationError as exc:
        logger.warning("Failed to parse update", extra={"update_id": update_id, "error": str(exc)})
        return False

    message = parsed.get_message()
    if message is None:
        logger.debug("Update has no message, skipping", extra={"update_id": update_id})
        return False

    # ── Command extraction ───────────────────────────────────────────────
    try:
        command = Command.from_message(message)
    except CommandError as exc:
        logger.debug("Not a command", extra={"update_id": update_id, "reason": str(exc)})
        return False

    logger.debug(
        "Processing command",
        extra={"update_id": update_id, "command": command.name, "arg_count": len(command.args)},
    )
    return await registry.dispatch(command)
