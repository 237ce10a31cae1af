"""JSON file storage backend — all accounts in a single file on disk."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from acmedns.errors import DomainNotFoundError, StorageError
from acmedns.models import Account
from acmedns.storage.base import Storage

logger = logging.getLogger(__name__)

DEFAULT_MODE = 0o600


def _load_accounts(path: Path) -> dict[str, Account]:
    """Read accounts from ``path``, returning an empty table if it can't be used.

    A missing file is the normal first-run case. Unreadable or malformed files
    are logged and discarded rather than failing construction.
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.debug("Storage file %s does not exist — starting empty", path)
        return {}
    except OSError as exc:
        logger.warning("Could not read storage file %s — starting empty: %s", path, exc)
        return {}

    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return {domain: Account.from_dict(record) for domain, record in data.items()}
    except ValueError as exc:
        logger.warning("Ignoring malformed storage file %s — starting empty: %s", path, exc)
        return {}


class FileStorage(Storage):
    """Storage backed by a JSON object mapping domain to account.

    The file is read once at construction and rewritten in full by ``save``.
    Several processes saving to the same path overwrite each other.
    """

    def __init__(self, path: str | os.PathLike[str], mode: int = DEFAULT_MODE) -> None:
        self._path = Path(path)
        self._mode = mode
        self._accounts = _load_accounts(self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def mode(self) -> int:
        return self._mode

    def put(self, domain: str, account: Account) -> None:
        self._accounts[domain] = account

    def fetch(self, domain: str) -> Account:
        try:
            return self._accounts[domain]
        except KeyError:
            raise DomainNotFoundError(domain) from None

    def fetch_all(self) -> dict[str, Account]:
        return dict(self._accounts)

    def save(self) -> None:
        """Write all accounts to the storage file.

        The data goes to a temporary file in the same directory, created with
        the configured mode, which then replaces the target. A failed save
        leaves any existing file untouched.
        """
        try:
            serialized = json.dumps({domain: acct.to_dict() for domain, acct in self._accounts.items()}, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"failed to serialize accounts: {exc}") from exc

        directory = self._path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=directory)
        except OSError as exc:
            raise StorageError(f"failed to write storage file {self._path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                os.fchmod(f.fileno(), self._mode)
                f.write(serialized)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"failed to write storage file {self._path}: {exc}") from exc

        logger.info("Saved %d account(s) to %s", len(self._accounts), self._path)
