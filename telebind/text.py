"""Message text with entities, addressed in UTF-16 code units.

Telegram reports entity ``offset`` and ``length`` in UTF-16 code units, so a
character outside the Basic Multilingual Plane (most emoji) counts twice.
Every slice in this module goes through the UTF-16-LE encoding of the text
rather than Python's code-point indexing.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Iterable, List, Optional, Sequence

from telebind.exceptions import TextEntityError
from telebind.models import MessageEntity, MessageEntityType

_CODEC = "utf-16-le"
_UNIT = 2  # bytes per UTF-16 code unit


def encode_utf16(value: str) -> bytes:
    """Encode *value* as UTF-16-LE, keeping lone surrogates as-is."""
    return value.encode(_CODEC, "surrogatepass")


def utf16_len(value: str) -> int:
    """Length of *value* in UTF-16 code units."""
    return len(encode_utf16(value)) // _UNIT


def utf16_slice(value: str, start: int, stop: Optional[int] = None, errors: str = "strict") -> str:
    """Return *value*[start:stop] where the bounds are UTF-16 code units.

    Raises:
        UnicodeDecodeError: If the slice splits a surrogate pair and
            *errors* is ``"strict"``.
    """
    raw = encode_utf16(value)
    end = None if stop is None else stop * _UNIT
    return raw[start * _UNIT:end].decode(_CODEC, errors)


@dataclasses.dataclass(frozen=True)
class TextEntityBotCommand:
    """A ``bot_command`` entity split into its command and optional bot name.

    ``command`` keeps the leading slash; ``bot_name`` excludes the ``@``.
    """

    command: str
    bot_name: Optional[str] = None


def validate_entities(data: str, entities: Iterable[MessageEntity]) -> None:
    """Check that every entity lies within *data*.

    Raises:
        TextEntityError: On an offset or length outside the text.
    """
    text_len = utf16_len(data)
    for entity in entities:
        if entity.offset < 0 or entity.offset > text_len:
            raise TextEntityError.bad_offset(entity.offset)
        if entity.length < 0 or entity.offset + entity.length > text_len:
            raise TextEntityError.bad_length(entity.length)


class Text:
    """The effective text of a message (``text`` or ``caption``) and its entities."""

    def __init__(self, data: str, entities: Optional[Sequence[MessageEntity]] = None) -> None:
        entities = list(entities or [])
        validate_entities(data, entities)
        self.data = data
        self.entities: List[MessageEntity] = entities

    def __repr__(self) -> str:
        return f"Text(data={self.data!r}, entities={self.entities!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self.data == other.data and self.entities == other.entities

    def get_entity_content(self, entity: MessageEntity) -> str:
        """Return the part of the text covered by *entity*.

        Decoding is lenient: a span that cuts a surrogate pair yields a
        replacement character instead of failing.
        """
        return utf16_slice(self.data, entity.offset, entity.offset + entity.length, errors="replace")

    def get_bot_commands(self) -> List[TextEntityBotCommand]:
        """Return every ``bot_command`` entity in order of appearance."""
        result: List[TextEntityBotCommand] = []
        for entity in self.entities:
            if entity.type != MessageEntityType.BOT_COMMAND:
                continue
            content = self.get_entity_content(entity)
            command, sep, bot_name = content.partition("@")
            result.append(TextEntityBotCommand(command=command, bot_name=bot_name if sep else None))
        return result


def serialize_text_entities(entities: Sequence[MessageEntity]) -> str:
    """Serialize *entities* to the JSON string sent in multipart requests.

    Raises:
        TextEntityError: If an entity cannot be represented as JSON.
    """
    try:
        return json.dumps(
            [entity.model_dump(mode="json", exclude_none=True) for entity in entities],
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as exc:
        raise TextEntityError(f"failed to serialize text entities: {exc}") from exc
