"""Exception hierarchy for the telebind Telegram SDK."""

from typing import Any, Dict, Optional


class APIException(Exception):
    """Raised when the Telegram Bot API rejects a request.

    Attributes:
        status_code: HTTP status code (or the ``error_code`` of the envelope).
        response_body: Raw response body as a dict, when available.
        retry_after: Seconds to wait before repeating, when flood control hit.
        migrate_to_chat_id: New chat id when a group became a supergroup.
    """

    def __init__(self, status_code: int, response_body: Optional[Dict[str, Any]] = None) -> None:
        """Initialise with the HTTP status code and optional body."""
        self.status_code = status_code
        self.response_body = response_body or {}
        parameters = self.response_body.get("parameters") or {}
        self.retry_after: Optional[int] = parameters.get("retry_after")
        self.migrate_to_chat_id: Optional[int] = parameters.get("migrate_to_chat_id")
        description = self.response_body.get("description", "Unknown error")
        super().__init__(f"API error {status_code}: {description}")

    @property
    def description(self) -> str:
        return self.response_body.get("description", "Unknown error")


# ── Command extraction ───────────────────────────────────────────────────────


class CommandError(Exception):
    """A message could not be parsed as a bot command.

    Callers usually treat this as "not a command" and move on.
    """

    reason: str = "unknown error"

    def __init__(self, reason: Optional[str] = None) -> None:
        if reason is not None:
            self.reason = reason
        super().__init__(f"failed to parse command: {self.reason}")


class CommandNotFound(CommandError):
    """The message carries no text or no ``bot_command`` entity."""

    reason = "not found"


class CommandUtf16Error(CommandError):
    """The text following the command is not valid UTF-16."""


class CommandMismatchedQuotes(CommandError):
    """The argument string contains an unterminated quote."""

    reason = "mismatched quotes"


# ── Text entities ────────────────────────────────────────────────────────────


class TextEntityError(ValueError):
    """An entity does not fit the text it annotates, or cannot be serialized."""

    @classmethod
    def bad_offset(cls, offset: int) -> "TextEntityError":
        return cls(f'offset "{offset}" is out of text bounds')

    @classmethod
    def bad_length(cls, length: int) -> "TextEntityError":
        return cls(f'length "{length}" is out of text bounds')


# ── Multipart form ───────────────────────────────────────────────────────────


class FormError(Exception):
    """A form could not be converted into a multipart body."""


class FormIoError(FormError):
    """Reading a file stream failed."""

    def __init__(self, field: str, cause: OSError) -> None:
        self.field = field
        super().__init__(f"can not read file: {cause}")


class FormMimeError(FormError):
    """A caller-supplied MIME type string is not valid."""

    def __init__(self, field: str, mime_type: str) -> None:
        self.field = field
        self.mime_type = mime_type
        super().__init__(f"can not set MIME type: invalid MIME type {mime_type!r}")


class PayloadError(Exception):
    """An HTTP request body could not be built."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"could not build an HTTP request: {cause}")
