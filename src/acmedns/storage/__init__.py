"""Account storage backends."""

from __future__ import annotations

from acmedns.storage.base import Storage
from acmedns.storage.file import FileStorage

__all__ = ["FileStorage", "Storage"]
