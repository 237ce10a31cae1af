"""Exception hierarchy for acmedns."""

from __future__ import annotations


class AcmeDnsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(AcmeDnsError, ValueError):
    """Invalid client or environment configuration. Never retried."""


class TransportError(AcmeDnsError):
    """The request never got an HTTP response (DNS, connect, TLS, I/O)."""


class RequestTimeoutError(TransportError):
    """A connect, TLS handshake or response wait exceeded its timeout."""


class _ResponseError(AcmeDnsError):
    """An HTTP response the client could not accept.

    Attributes:
        message: Short label describing the client operation that failed.
        status_code: HTTP status returned by the server.
        body: Raw response body returned by the server.
    """

    def __init__(self, message: str, status_code: int, body: bytes) -> None:
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message, status_code, body)

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}, response: {self.body.decode(errors='replace')}"


class ClientError(_ResponseError):
    """The ACME DNS server answered with a non-2xx status."""


class DecodeError(_ResponseError):
    """A 2xx response body could not be decoded into the expected shape."""


class StorageError(AcmeDnsError):
    """A storage backend failed to stage or persist accounts."""


class DomainNotFoundError(StorageError, KeyError):
    """The requested domain has no account in storage."""

    def __init__(self, domain: str) -> None:
        self.domain = domain
        super().__init__(domain)

    def __str__(self) -> str:
        return f"requested domain '{self.domain}' is not present in storage"
