"""Error types for request normalization and dispatch."""

from __future__ import annotations


class GozzleError(Exception):
    """Base class for every error raised or returned by gozzle."""


class ConfigError(GozzleError, ValueError):
    """A RequestConfig failed validation; correctable by the caller."""


class ConflictingAuthError(ConfigError):
    """Both bearer token and basic auth were supplied."""


class BodyNotAllowedError(ConfigError):
    """A body was supplied together with the GET method."""


class InvalidConfigError(ConfigError):
    """A numeric setting holds a value no request can honour."""


class DispatchError(GozzleError):
    """Building or executing the request failed."""


class SerializationError(DispatchError):
    """The request body could not be encoded as JSON."""


class RequestConstructionError(DispatchError):
    """The method or URL could not form a valid request."""


class TransportError(DispatchError):
    """Network, timeout, DNS, connection or TLS failure."""


class TooManyRedirectsError(TransportError):
    """The redirect chain went past the configured cap."""


class BodyReadError(DispatchError):
    """The response body could not be read in full."""
