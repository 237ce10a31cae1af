"""Abstract base class for account storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from acmedns.models import Account


class Storage(ABC):
    """Interface for backends that persist ACME DNS accounts keyed by domain.

    Accounts are staged with ``put`` and only become durable once ``save`` is
    called. Instances are not thread-safe; callers sharing one across threads
    must serialize access themselves.
    """

    @abstractmethod
    def put(self, domain: str, account: Account) -> None:
        """Stage ``account`` for ``domain``, replacing any earlier account.

        Raises:
            StorageError: if the backend rejects the account.
        """

    @abstractmethod
    def fetch(self, domain: str) -> Account:
        """Return the account stored for ``domain``.

        Raises:
            DomainNotFoundError: if no account exists for ``domain``.
        """

    @abstractmethod
    def fetch_all(self) -> dict[str, Account]:
        """Return every stored account keyed by domain.

        The returned dict is owned by the caller; mutating it does not
        affect the storage.
        """

    @abstractmethod
    def save(self) -> None:
        """Persist all staged accounts, replacing the previously saved state.

        Raises:
            StorageError: if the durable medium cannot be written.
        """
