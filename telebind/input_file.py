"""Files to upload: by Telegram file id, by URL, or as an open byte stream.

Usage::

    from telebind.input_file import InputFile

    InputFile.file_id("AgACAgIAAxkBAAI...")
    InputFile.url("https://example.com/cat.jpg")
    InputFile.reader(open("cat.jpg", "rb"), name="cat.jpg", mime_type="image/jpeg")
    InputFile.path("cat.jpg")
"""

from __future__ import annotations

import dataclasses
import mimetypes
import os
from typing import BinaryIO, Optional, Union

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclasses.dataclass(frozen=True)
class InputFileInfo:
    """File name and optional MIME type attached to an uploaded stream."""

    name: str
    mime_type: Optional[str] = None


class InputFile:
    """Base class of the three ways to reference file content."""

    @staticmethod
    def file_id(value: str) -> "InputFileId":
        """A file that already exists on the Telegram servers."""
        return InputFileId(value)

    @staticmethod
    def url(value: str) -> "InputFileUrl":
        """An HTTP URL Telegram should fetch the file from."""
        return InputFileUrl(value)

    @staticmethod
    def reader(stream: BinaryIO, name: Optional[str] = None, mime_type: Optional[str] = None) -> "InputFileReader":
        """A binary stream uploaded with ``multipart/form-data``.

        The MIME type is only kept when a file name is given as well.
        """
        info = InputFileInfo(name=name, mime_type=mime_type) if name is not None else None
        return InputFileReader(stream, info)

    @staticmethod
    def path(path: Union[str, "os.PathLike[str]"]) -> "InputFileReader":
        """Open *path* for upload, guessing the MIME type from its extension.

        Raises:
            OSError: If the file cannot be opened.
        """
        path = os.fspath(path)
        stream = open(path, "rb")
        file_name = os.path.basename(path)
        mime_type = mimetypes.guess_type(file_name)[0] or DEFAULT_MIME_TYPE
        return InputFileReader(stream, InputFileInfo(name=file_name, mime_type=mime_type))

    @staticmethod
    def coerce(value: object) -> "InputFile":
        """Accept an :class:`InputFile` or wrap a readable binary stream.

        Raises:
            TypeError: For any other value.
        """
        if isinstance(value, InputFile):
            return value
        if hasattr(value, "read"):
            return InputFileReader(value)  # type: ignore[arg-type]
        raise TypeError(f"expected an InputFile or a binary stream, got {type(value).__name__}")


@dataclasses.dataclass(frozen=True)
class InputFileId(InputFile):
    """A ``file_id`` that exists on the Telegram servers."""

    value: str


@dataclasses.dataclass(frozen=True)
class InputFileUrl(InputFile):
    """An HTTP URL to get a file from the Internet."""

    value: str


@dataclasses.dataclass(eq=False)
class InputFileReader(InputFile):
    """An open byte stream plus optional name/MIME metadata.

    The stream is owned by whoever holds this object; it is read once when
    the enclosing form is converted to a multipart body.
    """

    stream: BinaryIO
    info: Optional[InputFileInfo] = None

    def __repr__(self) -> str:
        return f"InputFileReader(info={self.info!r})"

    def with_file_name(self, name: str) -> "InputFileReader":
        mime_type = self.info.mime_type if self.info else None
        self.info = InputFileInfo(name=name, mime_type=mime_type)
        return self

    def with_mime_type(self, mime_type: str) -> "InputFileReader":
        """Set the MIME type; a file name must already be set."""
        if self.info is None:
            raise ValueError("set a file name before the MIME type")
        self.info = InputFileInfo(name=self.info.name, mime_type=mime_type)
        return self
