"""HTTP request payloads produced by :mod:`telebind.methods`.

A payload is one of three shapes: a multipart form (POST), a JSON document
(POST) or nothing at all (GET). Body construction is deferred until the
client asks for the request arguments, so a bad MIME type or an
unserializable value surfaces as :class:`~telebind.exceptions.PayloadError`
at send time.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel

from telebind.exceptions import FormError, PayloadError
from telebind.form import Form

logger = logging.getLogger("telebind.payload")


class PayloadKind(str, Enum):
    FORM = "form"
    JSON = "json"
    EMPTY = "empty"


class Payload:
    """What to send to a Bot API method and how."""

    def __init__(
        self,
        path: str,
        kind: PayloadKind,
        http_method: str = "POST",
        form: Optional[Form] = None,
        data: Union[BaseModel, Dict[str, Any], None] = None,
    ) -> None:
        self.path = path
        self.kind = kind
        self.http_method = http_method
        self.form = form
        self.data = data

    def __repr__(self) -> str:
        return f"Payload(path={self.path!r}, kind={self.kind.value!r}, http_method={self.http_method!r})"

    @classmethod
    def form_data(cls, path: str, form: Form) -> "Payload":
        return cls(path, PayloadKind.FORM, form=form)

    @classmethod
    def json(cls, path: str, data: Union[BaseModel, Dict[str, Any]]) -> "Payload":
        return cls(path, PayloadKind.JSON, data=data)

    @classmethod
    def empty(cls, path: str) -> "Payload":
        return cls(path, PayloadKind.EMPTY, http_method="GET")

    def build_url(self, base_url: str, token: str) -> str:
        return f"{base_url}/bot{token}/{self.path}"

    def json_body(self) -> str:
        """Serialize the JSON payload, dropping unset optional fields.

        Raises:
            PayloadError: If the data cannot be serialized.
        """
        try:
            if isinstance(self.data, BaseModel):
                return self.data.model_dump_json(exclude_none=True, by_alias=True)
            return json.dumps(self.data or {}, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise PayloadError(exc) from exc

    def into_request_kwargs(self) -> Dict[str, Any]:
        """Return keyword arguments for :meth:`requests.Session.request`.

        A form payload is consumed by this call.

        Raises:
            PayloadError: If the body cannot be built.
        """
        if self.kind is PayloadKind.FORM:
            assert self.form is not None
            try:
                body = self.form.into_multipart()
            except FormError as exc:
                logger.warning("Multipart body rejected", extra={"api_endpoint": self.path, "error": str(exc)})
                raise PayloadError(exc) from exc
            return {"files": body.to_requests_files()}
        if self.kind is PayloadKind.JSON:
            return {
                "data": self.json_body().encode("utf-8"),
                "headers": {"Content-Type": "application/json"},
            }
        return {}
