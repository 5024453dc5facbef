"""Client -- executes :mod:`telebind.methods` against the Telegram Bot API.

HTTP calls use the ``requests`` library. Every call sends exactly one
request; there is no retry and no rate limiting at this layer. The
``retry_after`` hint of a flood-control error is exposed on
:class:`~telebind.exceptions.APIException` for callers that want to wait.

:meth:`Client.aexecute` offloads the blocking call via
:func:`asyncio.to_thread` so async handlers never block the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterator, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from telebind.exceptions import APIException
from telebind.methods import Method
from telebind.models import Response

DEFAULT_HOST = "https://api.telegram.org"

logger = logging.getLogger("telebind.client")


class Client:
    """Client for the Telegram Bot API.

    Each call validates the response with the method's ``response_model`` and
    raises :class:`APIException` when Telegram reports an error.
    """

    _DEFAULT_TIMEOUT: int = 10
    _DOWNLOAD_CHUNK_SIZE: int = 64 * 1024

    def __init__(
        self,
        token: str,
        host: str = DEFAULT_HOST,
        timeout: int = _DEFAULT_TIMEOUT,
        proxy: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a new client.

        Args:
            token: Bot token issued by @BotFather.
            host: API host, ``https://api.telegram.org`` unless a local Bot API server is used.
            timeout: Request timeout in seconds.
            proxy: Optional proxy URL (``http://``, ``https://`` or ``socks5://``,
                credentials may be embedded as ``user:password@``).
            session: A preconfigured :class:`requests.Session` to send requests with.
        """
        self._token = token
        self._host = host.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        if proxy:
            self._session.proxies.update({"http": proxy, "https": proxy})

    @classmethod
    def from_env(cls) -> "Client":
        """Build a client from the values loaded by :mod:`config`.

        Raises:
            EnvironmentError: If ``BOT_TOKEN`` is not set.
        """
        from config import API_HOST, BOT_TOKEN, PROXY_URL, REQUEST_TIMEOUT  # deferred to avoid circular imports

        if not BOT_TOKEN:
            raise EnvironmentError("BOT_TOKEN environment variable is not set or is empty.")
        return cls(BOT_TOKEN, host=API_HOST, timeout=REQUEST_TIMEOUT, proxy=PROXY_URL)

    def __repr__(self) -> str:
        return f"Client(host={self._host!r}, token='...', timeout={self._timeout})"

    # ------------------------------------------------------------------
    #  Internal helpers
    # ------------------------------------------------------------------

    def _send(self, method: Method) -> Dict[str, Any]:
        """Send *method* and return the parsed JSON envelope.

        Raises:
            PayloadError: If the request body cannot be built.
            APIException: If the response is not JSON or reports ``ok: false``.
            requests.RequestException: On transport-level failures.
        """
        payload = method.into_payload()
        url = payload.build_url(self._host, self._token)
        kwargs = payload.into_request_kwargs()
        logger.debug(
            "Executing method",
            extra={"api_endpoint": payload.path, "http_method": payload.http_method, "payload_kind": payload.kind.value},
        )
        response = self._session.request(payload.http_method, url, timeout=self._timeout, **kwargs)
        try:
            body = response.json()
        except ValueError as exc:
            logger.error("Non-JSON response", extra={"api_endpoint": payload.path, "status_code": response.status_code})
            raise APIException(response.status_code, {"description": response.text or "Invalid JSON response"}) from exc
        if not isinstance(body, dict):
            raise APIException(response.status_code, {"description": "Unexpected response shape"})
        try:
            envelope = Response.model_validate(body)
        except ValidationError as exc:
            logger.error("Malformed response envelope", extra={"api_endpoint": payload.path, "status_code": response.status_code})
            raise APIException(response.status_code, body) from exc
        if not envelope.ok:
            logger.warning(
                "Telegram returned an error",
                extra={"api_endpoint": payload.path, "error_code": envelope.error_code, "description": envelope.description},
            )
            raise APIException(envelope.error_code or response.status_code, body)
        return body

    # ------------------------------------------------------------------
    #  Public API
    # ------------------------------------------------------------------

    def execute(self, method: Method) -> Any:
        """Execute *method* and return its validated result."""
        body = self._send(method)
        return TypeAdapter(method.response_model).validate_python(body.get("result"))

    async def aexecute(self, method: Method) -> Any:
        """Run :meth:`execute` inside a thread to keep the event loop free."""
        return await asyncio.to_thread(self.execute, method)

    def download_file(self, file_path: str) -> Iterator[bytes]:
        """Stream the content of a file from the Telegram file storage.

        Args:
            file_path: The ``file_path`` field of a :class:`~telebind.models.File`.

        Raises:
            APIException: If the HTTP response status is not 2xx.
            requests.RequestException: On transport-level failures.
        """
        url = f"{self._host}/file/bot{self._token}/{file_path.lstrip('/')}"
        logger.debug("Downloading file", extra={"file_path": file_path})
        response = self._session.get(url, stream=True, timeout=self._timeout)
        if not response.ok:
            description = response.text
            response.close()
            raise APIException(response.status_code, {"description": description})
        return response.iter_content(chunk_size=self._DOWNLOAD_CHUNK_SIZE)
