"""Multipart form model used by every file-uploading method.

A :class:`Form` is assembled field by field by the method builders in
:mod:`telebind.methods` and converted exactly once, by
:meth:`Form.into_multipart`, into a :class:`MultipartBody` that the client
hands to ``requests``.

Values are either text (:class:`FormText`) or files (:class:`FormFile`).
Files referenced by id or URL travel as plain text parts; only streams are
sent as binary parts.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from telebind.exceptions import FormIoError, FormMimeError
from telebind.input_file import InputFile, InputFileId, InputFileReader, InputFileUrl

logger = logging.getLogger("telebind.form")

# RFC 6838 section 4.2 restricted-name, plus RFC 7231 media-type parameters.
_TOKEN = r"[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]{0,126}"
_PARAM_VALUE = r'(?:[A-Za-z0-9!#$%&\'*+.^_`|~-]+|"(?:[^"\\]|\\.)*")'
_MIME_RE = re.compile(
    rf"^(?P<type>{_TOKEN})/(?P<subtype>{_TOKEN})"
    rf"(?P<params>(?:\s*;\s*[A-Za-z0-9!#$%&'*+.^_`|~-]+={_PARAM_VALUE})*)\s*$"
)


def parse_mime_type(value: str) -> str:
    """Validate *value* as a MIME type and return it with a lower-cased type/subtype.

    Raises:
        ValueError: If *value* is not of the form ``type/subtype[; key=value]*``.
    """
    match = _MIME_RE.match(value.strip())
    if match is None:
        raise ValueError(f"invalid MIME type: {value!r}")
    essence = f"{match.group('type')}/{match.group('subtype')}".lower()
    return essence + match.group("params")


# ── Values ───────────────────────────────────────────────────────────────────


class FormValue:
    """One field of a :class:`Form`."""

    @staticmethod
    def of(value: Any) -> "FormValue":
        """Convert *value* into a form value.

        Files are wrapped as :class:`FormFile`; everything else is turned
        into text. Booleans become ``"true"``/``"false"`` and enum members
        their value, matching what the Bot API expects.
        """
        if isinstance(value, FormValue):
            return value
        if isinstance(value, InputFile):
            return FormFile(value)
        if isinstance(value, bool):
            return FormText("true" if value else "false")
        if isinstance(value, Enum):
            return FormText(str(value.value))
        return FormText(str(value))

    def get_text(self) -> Optional[str]:
        return None

    def get_file(self) -> Optional[InputFile]:
        return None


@dataclasses.dataclass(frozen=True)
class FormText(FormValue):
    """A scalar field sent as a UTF-8 text part."""

    text: str

    def get_text(self) -> Optional[str]:
        return self.text


@dataclasses.dataclass(frozen=True, eq=False)
class FormFile(FormValue):
    """A file field; see :class:`~telebind.input_file.InputFile`."""

    file: InputFile

    def get_file(self) -> Optional[InputFile]:
        return self.file


# ── Wire-level body ──────────────────────────────────────────────────────────


@dataclasses.dataclass(frozen=True)
class Part:
    """One part of a multipart body."""

    name: str
    data: Union[str, bytes]
    file_name: Optional[str] = None
    mime_type: Optional[str] = None

    @classmethod
    def text(cls, name: str, value: str) -> "Part":
        return cls(name=name, data=value)

    @property
    def is_text(self) -> bool:
        return isinstance(self.data, str)


@dataclasses.dataclass
class MultipartBody:
    """The converted form, ready to be sent."""

    parts: List[Part] = dataclasses.field(default_factory=list)

    def __len__(self) -> int:
        return len(self.parts)

    def __iter__(self) -> Iterator[Part]:
        return iter(self.parts)

    def get_part(self, name: str) -> Optional[Part]:
        for part in self.parts:
            if part.name == name:
                return part
        return None

    def to_requests_files(self) -> List[Tuple[str, Tuple[Any, ...]]]:
        """Return the ``files=`` argument for :func:`requests.request`.

        Text parts carry no file name, so ``requests`` sends them as plain
        form fields.
        """
        files: List[Tuple[str, Tuple[Any, ...]]] = []
        for part in self.parts:
            if part.mime_type is not None:
                files.append((part.name, (part.file_name, part.data, part.mime_type)))
            else:
                files.append((part.name, (part.file_name, part.data)))
        return files


# ── Form ─────────────────────────────────────────────────────────────────────


class Form:
    """A set of named fields destined for a ``multipart/form-data`` body.

    A field name maps to at most one value; inserting the same name again
    overwrites the previous value.
    """

    def __init__(self, fields: Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None] = None) -> None:
        self._fields: Dict[str, FormValue] = {}
        if fields is None:
            return
        items = fields.items() if isinstance(fields, Mapping) else fields
        for name, value in items:
            self.insert_field(name, value)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __repr__(self) -> str:
        return f"Form(fields={sorted(self._fields)!r})"

    @property
    def fields(self) -> Mapping[str, FormValue]:
        return dict(self._fields)

    def insert_field(self, name: str, value: Any) -> None:
        self._fields[name] = FormValue.of(value)

    def remove_field(self, name: str) -> None:
        self._fields.pop(name, None)

    def get_field(self, name: str) -> Optional[FormValue]:
        return self._fields.get(name)

    def has_field(self, name: str) -> bool:
        return name in self._fields

    def into_multipart(self) -> MultipartBody:
        """Convert every field into a part, consuming the form.

        The form is emptied before conversion starts, so a file stream is
        never read twice. Every stream is closed once read; if conversion
        fails, the streams of the remaining fields are closed as well.

        Raises:
            FormIoError: If reading a file stream fails.
            FormMimeError: If a file carries an invalid MIME type.
        """
        fields, self._fields = self._fields, {}
        body = MultipartBody()
        items = iter(fields.items())
        try:
            for name, value in items:
                body.parts.append(_into_part(name, value))
        except Exception:
            # Streams of fields that were never reached are closed too.
            for _, value in items:
                _close_stream(value)
            raise
        logger.debug("Built multipart body", extra={"parts": [part.name for part in body.parts]})
        return body


def _into_part(name: str, value: FormValue) -> Part:
    if isinstance(value, FormText):
        return Part.text(name, value.text)

    assert isinstance(value, FormFile)
    file = value.file
    if isinstance(file, (InputFileId, InputFileUrl)):
        return Part.text(name, file.value)
    if not isinstance(file, InputFileReader):
        raise TypeError(f"unsupported input file: {type(file).__name__}")

    info = file.info
    mime_type: Optional[str] = None
    try:
        if info is not None and info.mime_type is not None:
            try:
                mime_type = parse_mime_type(info.mime_type)
            except ValueError as exc:
                raise FormMimeError(name, info.mime_type) from exc
        try:
            data = file.stream.read()
        except OSError as exc:
            raise FormIoError(name, exc) from exc
    finally:
        file.stream.close()
    if isinstance(data, str):
        data = data.encode("utf-8")

    return Part(
        name=name,
        data=bytes(data),
        file_name=info.name if info is not None else None,
        mime_type=mime_type,
    )


def _close_stream(value: FormValue) -> None:
    file = value.get_file()
    if isinstance(file, InputFileReader):
        file.stream.close()
