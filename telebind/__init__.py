"""telebind -- a typed Telegram Bot API binding.

Pydantic models for the Bot API objects, method builders that turn into
JSON or multipart payloads, a bot-command extractor and a thin ``requests``
client.

Usage::

    from telebind import Client, Command, InputFile
    from telebind.methods import SendMessage, SendPhoto
    from telebind.models import Message, Update
"""

from telebind.client import Client
from telebind.command import Command
from telebind.exceptions import (
    APIException,
    CommandError,
    CommandMismatchedQuotes,
    CommandNotFound,
    CommandUtf16Error,
    FormError,
    FormIoError,
    FormMimeError,
    PayloadError,
    TextEntityError,
)
from telebind.form import Form, FormFile, FormText, FormValue, MultipartBody, Part
from telebind.input_file import InputFile, InputFileId, InputFileInfo, InputFileReader, InputFileUrl

__all__ = [
    "Client",
    "Command",
    "Form",
    "FormValue",
    "FormText",
    "FormFile",
    "MultipartBody",
    "Part",
    "InputFile",
    "InputFileId",
    "InputFileUrl",
    "InputFileReader",
    "InputFileInfo",
    "APIException",
    "CommandError",
    "CommandNotFound",
    "CommandUtf16Error",
    "CommandMismatchedQuotes",
    "FormError",
    "FormIoError",
    "FormMimeError",
    "PayloadError",
    "TextEntityError",
]
