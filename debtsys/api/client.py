"""HTTP client for the debt backend.

One call maps to exactly one request. Every failure surfaces as an
:class:`~debtsys.api.errors.ApiError` subclass; nothing is retried here, the
repositories decide what a failure means for their callers.
"""

import logging
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import httpx
from pydantic import BaseModel

from debtsys.api.errors import DecodeError, HttpStatusError, TransportError
from debtsys.config import Settings

logger = logging.getLogger(__name__)

FileInput = str | Path | bytes | tuple

_NO_BODY = object()


def to_jsonable(body: Any) -> Any:
    """Turn models (and containers of models) into plain JSON data."""
    if isinstance(body, BaseModel):
        return body.model_dump(by_alias=True, mode="json")
    if isinstance(body, dict):
        return {k: to_jsonable(v) for k, v in body.items()}
    if isinstance(body, (list, tuple)):
        return [to_jsonable(v) for v in body]
    if isinstance(body, Enum):
        return body.value
    if isinstance(body, (date, datetime)):
        return body.isoformat()
    return body


def _file_part(file: FileInput) -> tuple:
    if isinstance(file, tuple):
        return file
    if isinstance(file, bytes):
        return ("statement", file)
    path = Path(file)
    return (path.name, path.read_bytes())


class HttpClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        session: httpx.Client | None = None,
    ) -> None:
        """
        - base_url: backend root, e.g. "http://localhost:8080"
        - timeout: seconds per request, ignored when a session is supplied
        - session: pre-built httpx.Client (tests pass a TestClient here)
        """
        self.base_url = base_url.rstrip("/")
        self._owns_session = session is None
        self._http = session if session is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings, session: httpx.Client | None = None) -> "HttpClient":
        return cls(settings.api_base_url, timeout=settings.api_timeout_seconds, session=session)

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self._http.close()

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    # --- verbs ---

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> Any:
        return self._request("POST", path, body=body)

    def put(self, path: str, body: Any) -> Any:
        return self._request("PUT", path, body=body)

    def patch(self, path: str, body: Any = _NO_BODY) -> Any:
        # State-transition endpoints take no payload at all
        return self._request("PATCH", path, body=body)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def upload_file(
        self,
        path: str,
        file: FileInput,
        extra_fields: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """POST a multipart body with a ``file`` part plus optional string fields.

        No JSON content type is sent so httpx can set the multipart boundary.
        """
        return self._request(
            "POST",
            path,
            params=params,
            files={"file": _file_part(file)},
            data=dict(extra_fields) if extra_fields else None,
        )

    # --- internals ---

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = _NO_BODY,
        params: Mapping[str, Any] | None = None,
        files: dict | None = None,
        data: dict | None = None,
    ) -> Any:
        url = self.url_for(path)
        kwargs: dict[str, Any] = {"headers": {"Accept": "application/json"}}
        if params:
            kwargs["params"] = params
        if body is not _NO_BODY:
            kwargs["json"] = to_jsonable(body)
        if files is not None:
            kwargs["files"] = files
        if data is not None:
            kwargs["data"] = data

        request_info = {"method": method, "url": url}
        logger.debug("%s %s", method, url, extra=request_info)
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out", method, url, extra=request_info)
            raise TransportError(f"{method} {url} timed out") from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e, extra=request_info)
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not response.is_success:
            # 404 is a lookup miss; fetch_record turns it into None
            log = logger.info if response.status_code == 404 else logger.error
            log(
                "%s %s failed: %s %s", method, url, response.status_code, response.text,
                extra={**request_info, "status_code": response.status_code},
            )
            raise HttpStatusError(response.status_code, method, url, response.text)

        return self._decode(response, method, url)

    @staticmethod
    def _decode(response: httpx.Response, method: str, url: str) -> Any:
        if not response.text.strip():
            return {}
        try:
            return response.json()
        except ValueError as e:
            # Management endpoints answer with a bare status string
            if response.headers.get("content-type", "").startswith("text/"):
                return response.text
            raise DecodeError(f"{method} {url} returned invalid JSON") from e
