"""Request normalization and dispatch."""

from .client import HttpClient, ResponseEnvelope, send, status_text
from .config import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    JSON_ACCEPT,
    MULTIPART_CONTENT_TYPE,
    URL_ENCODED_CONTENT_TYPE,
    RequestConfig,
    normalize_config,
)
from .errors import (
    BodyNotAllowedError,
    BodyReadError,
    ConfigError,
    ConflictingAuthError,
    DispatchError,
    GozzleError,
    InvalidConfigError,
    RequestConstructionError,
    SerializationError,
    TooManyRedirectsError,
    TransportError,
)
from .types import Err, Ok, Result

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_USER_AGENT",
    "JSON_ACCEPT",
    "MULTIPART_CONTENT_TYPE",
    "URL_ENCODED_CONTENT_TYPE",
    "BodyNotAllowedError",
    "BodyReadError",
    "ConfigError",
    "ConflictingAuthError",
    "DispatchError",
    "Err",
    "GozzleError",
    "HttpClient",
    "InvalidConfigError",
    "Ok",
    "RequestConfig",
    "RequestConstructionError",
    "ResponseEnvelope",
    "Result",
    "SerializationError",
    "TooManyRedirectsError",
    "TransportError",
    "normalize_config",
    "send",
    "status_text",
]
