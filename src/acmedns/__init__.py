"""Client library for ACME DNS servers, with pluggable account storage."""

from __future__ import annotations

from acmedns.client import Client
from acmedns.errors import (
    AcmeDnsError,
    ClientError,
    ConfigurationError,
    DecodeError,
    DomainNotFoundError,
    RequestTimeoutError,
    StorageError,
    TransportError,
)
from acmedns.models import Account
from acmedns.storage import FileStorage, Storage

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AcmeDnsError",
    "Client",
    "ClientError",
    "ConfigurationError",
    "DecodeError",
    "DomainNotFoundError",
    "FileStorage",
    "RequestTimeoutError",
    "Storage",
    "StorageError",
    "TransportError",
]
