"""Bot command extraction.

Only the first ``bot_command`` entity of a message is taken into account;
any later command entities are ignored. Everything after the command (and
its optional ``@botname`` suffix) is treated as arguments separated by
whitespace. To pass an argument containing spaces, wrap it in quotes:
``/note 'buy milk' today``.

Usage::

    from telebind.command import Command
    from telebind.exceptions import CommandError

    try:
        command = Command.from_message(message)
    except CommandError:
        ...  # not a command, fall through to other handling
    else:
        print(command.name, command.args)
"""

from __future__ import annotations

import dataclasses
import shlex
from typing import List

from telebind.exceptions import CommandMismatchedQuotes, CommandNotFound, CommandUtf16Error
from telebind.models import Message
from telebind.text import utf16_len, utf16_slice


@dataclasses.dataclass(frozen=True)
class Command:
    """A command parsed out of a message.

    Attributes:
        name: Command name with the leading slash, without ``@botname``.
        args: Shell-split arguments; empty when nothing follows the command.
        message: The message the command comes from.
    """

    name: str
    args: List[str]
    message: Message

    @classmethod
    def from_message(cls, message: Message) -> "Command":
        """Parse the first bot command of *message*.

        Raises:
            CommandNotFound: The message has no text or no command entity.
            CommandUtf16Error: The argument span is not valid UTF-16.
            CommandMismatchedQuotes: The arguments contain an unterminated quote.
        """
        text = message.get_text()
        if text is None:
            raise CommandNotFound()
        commands = text.get_bot_commands()
        if not commands:
            raise CommandNotFound()

        command = commands[0]
        name = command.command

        # Offsets below are UTF-16 code units, as in Telegram entities.
        index = text.data.find(name)
        offset = utf16_len(text.data[:index]) if index > 0 else 0
        length = utf16_len(name)
        if command.bot_name is not None:
            length += utf16_len(command.bot_name) + 1  # "@"

        try:
            raw_args = utf16_slice(text.data, offset + length)
        except UnicodeDecodeError as exc:
            raise CommandUtf16Error(str(exc)) from exc

        try:
            args = shlex.split(raw_args)
        except ValueError as exc:
            raise CommandMismatchedQuotes() from exc

        return cls(name=name, args=args, message=message)
