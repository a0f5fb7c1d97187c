"""Provider failure taxonomy.

Every outbound call ends in success or exactly one of these. Proxy routes
render them as ``{"error": ...}`` payloads; the assistant router catches
them and moves on to the next strategy.
"""


class ProxyError(Exception):
    """Base class for failures talking to an external provider."""
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigMissingError(ProxyError):
    """A required credential is not configured. Never falls back."""
    status_code = 400


class UpstreamError(ProxyError):
    """Non-2xx response or network failure from the provider."""
    status_code = 502


class RateLimitedError(UpstreamError):
    """Provider answered HTTP 429."""
    status_code = 429


class UpstreamTimeoutError(ProxyError):
    """Provider did not answer within the configured timeout."""
    status_code = 504


class ResponseParseError(ProxyError):
    """Provider answered 2xx with a body we could not decode."""
    status_code = 502
