"""Request configuration and its normalization rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping

from .errors import BodyNotAllowedError, ConflictingAuthError, InvalidConfigError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "gozzle-client-v1.0"
DEFAULT_CONTENT_TYPE = "application/json; charset=utf-8"
DEFAULT_TIMEOUT_SECONDS = 5
DEFAULT_MAX_REDIRECTS = 5

JSON_ACCEPT = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"
# Literal kept for compatibility with existing servers.
URL_ENCODED_CONTENT_TYPE = "application/x-www-form-url-encoded"


def _copy_mapping(value: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Return a shallow dict copy, preserving None."""

    if value is None:
        return None
    return dict(value)


@dataclass
class RequestConfig:
    """Declarative description of a single HTTP request.

    Zero values mean "use the default". Run the config through
    ``normalize_config`` (``HttpClient.send`` does this for you) to get a
    fully populated copy.

    ``retries``, ``retry_sleep`` and ``struct_scan`` are accepted for
    compatibility with existing callers; dispatch never reads them.
    """

    url: str = ""
    method: str = ""
    base_url: str = ""
    basic_auth: Mapping[str, str] | None = None
    bearer_token: str = ""
    headers: Mapping[str, str] | None = None
    timeout_seconds: int = 0
    body: Mapping[str, Any] | None = None
    user_agent: str = ""
    accept_json: bool = False
    accepts: str = ""
    as_multipart: bool = False
    as_url_encoded: bool = False
    content_type: str = ""
    max_redirects: int = 0
    retries: int = 0
    retry_sleep: int = 0
    struct_scan: Any = None

    def normalized(self) -> RequestConfig:
        """Shortcut for ``normalize_config(self)``."""
        return normalize_config(self)


def normalize_config(config: RequestConfig) -> RequestConfig:
    """Validate ``config`` and return a copy with defaults filled in.

    The argument is left untouched, so one config can safely be shared
    between callers. Validation stops at the first problem found.

    Args:
        config: Caller supplied request description.

    Returns:
        A new RequestConfig with user agent, timeout, redirect cap and
        accept header populated.

    Raises:
        ConflictingAuthError: both ``bearer_token`` and ``basic_auth`` set.
        BodyNotAllowedError: ``body`` set while ``method`` is ``"GET"``.
        InvalidConfigError: negative timeout or redirect cap.
    """
    c = replace(
        config,
        basic_auth=_copy_mapping(config.basic_auth),
        headers=_copy_mapping(config.headers),
        body=_copy_mapping(config.body),
    )
    c.accept_json = True

    if not c.user_agent:
        c.user_agent = DEFAULT_USER_AGENT
    if c.timeout_seconds == 0:
        c.timeout_seconds = DEFAULT_TIMEOUT_SECONDS
    if c.max_redirects == 0:
        c.max_redirects = DEFAULT_MAX_REDIRECTS

    if c.timeout_seconds < 0:
        raise InvalidConfigError("timeout_seconds must be >= 0")
    if c.max_redirects < 0:
        raise InvalidConfigError("max_redirects must be >= 0")

    if c.bearer_token and c.basic_auth is not None:
        raise ConflictingAuthError(
            "cannot authenticate with bearer and basic auth"
        )

    # Exact match: a lowercase "get" passes here and is uppercased later.
    if c.body is not None and c.method == "GET":
        raise BodyNotAllowedError("body not allowed for 'GET' method")

    if c.accept_json:
        c.accepts = JSON_ACCEPT

    # Any caller value is replaced; only the flags below can change it.
    if c.content_type:
        c.content_type = DEFAULT_CONTENT_TYPE
    if c.as_url_encoded:
        c.content_type = URL_ENCODED_CONTENT_TYPE
    if c.as_multipart:
        c.content_type = MULTIPART_CONTENT_TYPE

    if c.base_url:
        c.base_url = c.base_url.strip("/")

    logger.debug(
        "Normalized request config: method=%r url=%r timeout=%ss max_redirects=%s",
        c.method,
        c.url,
        c.timeout_seconds,
        c.max_redirects,
    )
    return c
