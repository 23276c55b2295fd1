"""
Collection Repository - the user's registry of owned printings.

The store is a JSON object mapping normalized card names to the list of owned
set codes. It is loaded once and rewritten in full on every mutation; there is
no locking across processes.
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from utils.card_name import normalize_card_name
from utils.constants import COLLECTION_FILE
from utils.errors import CacheDecodeError, CacheIOError

__all__ = ["CollectionStore"]


class CollectionStore:
    """Owned printing codes per card, persisted to a JSON file."""

    def __init__(self, path: Path = COLLECTION_FILE, versions: dict[str, list[str]] | None = None):
        self.path = Path(path)
        self._versions: dict[str, list[str]] = versions if versions is not None else {}

    @classmethod
    def load(cls, path: Path = COLLECTION_FILE) -> CollectionStore:
        """
        Load the collection file, creating an empty one when it does not exist.

        Raises:
            CacheIOError: If the file cannot be read or created
            CacheDecodeError: If the file is not a name -> list of codes object
        """
        path = Path(path)
        if not path.exists():
            logger.info(f"No collection file found, creating {path}")
            store = cls(path, {})
            store._save()
            return store
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CacheIOError(f"Unable to read collection at {path}: {exc}") from exc
        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            raise CacheDecodeError(f"Invalid JSON in collection {path}: {exc}") from exc
        if not isinstance(data, dict) or not all(
            isinstance(codes, list) and all(isinstance(code, str) for code in codes)
            for codes in data.values()
        ):
            raise CacheDecodeError(f"Collection {path} must map card names to lists of set codes")
        logger.info(f"Loaded collection from {path} with {len(data)} unique cards")
        return cls(path, data)

    def get(self, name: str) -> list[str]:
        """Return a copy of the owned printing codes for ``name``."""
        return list(self._versions.get(normalize_card_name(name), []))

    def add(self, name: str, printing: str) -> None:
        key = normalize_card_name(name)
        self._versions.setdefault(key, []).append(printing)
        self._save()
        logger.debug(f"Added {printing} of {key} to collection")

    def remove(self, name: str, printing: str) -> bool:
        """
        Remove one copy of ``printing`` for ``name``.

        Returns:
            True if a copy was removed, False if none was owned
        """
        key = normalize_card_name(name)
        versions = self._versions.get(key)
        if not versions or printing not in versions:
            return False
        versions.remove(printing)
        self._save()
        logger.debug(f"Removed {printing} of {key} from collection")
        return True

    def __len__(self) -> int:
        return len(self._versions)

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(self._versions, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as exc:
            raise CacheIOError(f"Unable to write collection at {self.path}: {exc}") from exc
