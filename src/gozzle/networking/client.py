"""Single-shot HTTP dispatch for gozzle.

``HttpClient.send`` turns one RequestConfig into one HTTP exchange. It
normalizes the config, builds the request, executes it through a fresh
``requests`` session and wraps the outcome in a Result. Nothing is retried
and nothing is shared between calls.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from http.client import responses as _REASON_PHRASES
from typing import Any, Callable, Mapping

import requests
from requests.auth import HTTPBasicAuth
from requests.exceptions import InvalidHeader
from requests.utils import check_header_validity

from .config import RequestConfig, normalize_config
from .errors import (
    BodyReadError,
    ConfigError,
    GozzleError,
    RequestConstructionError,
    SerializationError,
    TooManyRedirectsError,
    TransportError,
)
from .types import Err, Ok, Result

logger = logging.getLogger(__name__)

# RFC 9110 token characters.
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
# Header name and value grammar accepted by http.client.
_HEADER_NAME = re.compile(r"[^:\s][^:\r\n]*")
_HEADER_VALUE = re.compile(r"[^\r\n\x00]*")


def status_text(status_code: int) -> str:
    """Return the standard reason phrase for ``status_code``, or ``""``."""
    return _REASON_PHRASES.get(status_code, "")


def _check_headers(headers: Mapping[str, Any]) -> None:
    """Reject header names or values that http.client would refuse to send."""
    for name, value in headers.items():
        check_header_validity((name, value))
        if not _HEADER_NAME.fullmatch(name) or not name.isascii():
            raise InvalidHeader(f"Invalid header name {name!r}")
        if not isinstance(value, str):
            continue
        if not _HEADER_VALUE.fullmatch(value):
            raise InvalidHeader(f"Invalid header value for {name!r}")
        value.encode("latin-1")


@dataclass(frozen=True)
class ResponseEnvelope:
    """Uniform wrapper around one completed HTTP exchange.

    ``headers`` is intentionally left empty; response headers are not
    copied. Use ``Ok.meta`` for status and timing diagnostics.
    """

    raw_body: bytes
    status_code: int
    status_text: str
    config: RequestConfig
    request: requests.PreparedRequest
    headers: Mapping[str, str] = field(default_factory=dict)


class HttpClient:
    """Request dispatcher (sync).

    Each ``send`` call builds its own session from ``session_factory`` and
    closes it afterwards, so concurrent calls never share mutable state.
    """

    def __init__(
        self,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        """Create a new HttpClient.

        Args:
            session_factory: Zero-argument callable returning the
                ``requests.Session`` used as transport for one call.
        """
        self._session_factory = session_factory

    @staticmethod
    def _build_meta(
        config: RequestConfig,
        response: requests.Response | None = None,
        final_error: str | None = None,
    ) -> dict[str, Any]:
        """Construct metadata dictionary from config and response."""
        meta: dict[str, Any] = {}
        meta["method"] = (config.method or "GET").upper()
        meta["url"] = config.url
        meta["timeout_s"] = config.timeout_seconds
        meta["max_redirects"] = config.max_redirects

        if response is not None:
            meta["status_code"] = response.status_code
            meta["url"] = response.url
            meta["reason"] = response.reason
            meta["redirects"] = len(response.history)
            try:
                meta["elapsed_s"] = response.elapsed.total_seconds()
            except AttributeError:
                pass  # Not set on hand-built responses
        if final_error is not None:
            meta["final_error"] = final_error

        return meta

    def _fail(
        self,
        config: RequestConfig,
        error: GozzleError,
        cause: BaseException | None = None,
    ) -> Err[GozzleError]:
        """Chain ``cause`` into ``error`` and wrap it as an Err."""
        if cause is not None:
            error.__cause__ = cause
        final_error = type(cause).__name__ if cause is not None else type(error).__name__
        return Err(error, meta=self._build_meta(config, final_error=final_error))

    @staticmethod
    def _encode_body(body: Mapping[str, Any] | None) -> bytes | None:
        if body is None:
            return None
        return json.dumps(body, separators=(",", ":"), allow_nan=False).encode("utf-8")

    @staticmethod
    def _prepare(config: RequestConfig, payload: bytes | None) -> requests.PreparedRequest:
        """Build the outgoing request with headers in precedence order."""
        method = (config.method or "GET").upper()
        if not _METHOD_TOKEN.fullmatch(method):
            raise RequestConstructionError(f"invalid method {config.method!r}")

        prepared = requests.Request(method=method, url=config.url, data=payload).prepare()

        if payload is not None:
            prepared.headers["Content-Type"] = config.content_type

        if config.basic_auth is not None:
            HTTPBasicAuth(
                config.basic_auth.get("username", ""),
                config.basic_auth.get("password", ""),
            )(prepared)
        elif config.bearer_token:
            prepared.headers["Authorization"] = f"Bearer {config.bearer_token}"

        prepared.headers["Accept"] = config.accepts
        prepared.headers["User-Agent"] = config.user_agent

        # Caller headers override everything set above.
        if config.headers:
            for key, value in config.headers.items():
                prepared.headers[key] = value

        _check_headers(prepared.headers)
        return prepared

    def send(self, config: RequestConfig) -> Result[ResponseEnvelope, GozzleError]:
        """Execute exactly one HTTP request described by ``config``.

        Args:
            config: Request description. It is not mutated; the normalized
                copy is echoed back in the envelope.

        Returns:
            Ok holding a ResponseEnvelope for any HTTP status, or Err holding
            the first error met. Errors are never raised.

        ``timeout_seconds`` is handed to requests as is, so it bounds the
        connect and each socket read separately rather than the whole
        round trip.
        """
        try:
            config = normalize_config(config)
        except ConfigError as exc:
            logger.debug("Rejected request config: %s", exc)
            return Err(exc, meta=self._build_meta(config, final_error=type(exc).__name__))

        try:
            payload = self._encode_body(config.body)
        except (TypeError, ValueError) as exc:
            return self._fail(config, SerializationError(f"cannot encode body as JSON: {exc}"), exc)

        try:
            prepared = self._prepare(config, payload)
        except RequestConstructionError as exc:
            return self._fail(config, exc)
        except (requests.exceptions.RequestException, ValueError) as exc:
            return self._fail(config, RequestConstructionError(str(exc)), exc)

        logger.debug("Dispatching %s %s", prepared.method, prepared.url)

        with self._session_factory() as session:
            session.max_redirects = config.max_redirects
            try:
                response = session.send(
                    prepared,
                    timeout=config.timeout_seconds,
                    allow_redirects=True,
                    stream=True,
                )
            except requests.exceptions.TooManyRedirects as exc:
                logger.warning(
                    "%s %s exceeded %d redirects",
                    prepared.method,
                    prepared.url,
                    config.max_redirects,
                )
                return self._fail(config, TooManyRedirectsError(str(exc)), exc)
            except requests.exceptions.RequestException as exc:
                logger.warning("%s %s failed: %s", prepared.method, prepared.url, exc)
                return self._fail(config, TransportError(str(exc)), exc)
            except ValueError as exc:
                # Raised by urllib3/http.client for input rejected on the wire.
                logger.warning("%s %s failed: %s", prepared.method, prepared.url, exc)
                return self._fail(config, TransportError(str(exc)), exc)

            try:
                raw_body = response.content
            except requests.exceptions.RequestException as exc:
                logger.warning(
                    "Reading response body of %s %s failed: %s",
                    prepared.method,
                    prepared.url,
                    exc,
                )
                return self._fail(config, BodyReadError(str(exc)), exc)
            finally:
                response.close()

        envelope = ResponseEnvelope(
            raw_body=raw_body,
            status_code=response.status_code,
            status_text=status_text(response.status_code),
            config=config,
            request=prepared,
        )
        logger.debug(
            "%s %s -> %d (%d bytes)",
            prepared.method,
            prepared.url,
            envelope.status_code,
            len(raw_body),
        )
        return Ok(envelope, meta=self._build_meta(config, response=response))


_default_client = HttpClient()


def send(config: RequestConfig) -> Result[ResponseEnvelope, GozzleError]:
    """Dispatch ``config`` through a shared default HttpClient."""
    return _default_client.send(config)
