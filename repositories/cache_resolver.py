"""
Cache-aside resolver backed by one JSON file per resource kind.

A resolver instance owns its file: the whole map is loaded on first use,
kept in memory and rewritten in full after every miss is fetched.
"""

from __future__ import annotations

import asyncio
import copy
import functools
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, Generic, TypeVar

from loguru import logger

from utils.constants import RESOLVER_CONCURRENCY
from utils.errors import CacheDecodeError, CacheIOError

V = TypeVar("V")

__all__ = ["CacheAsideResolver"]


class CacheAsideResolver(Generic[V]):
    """Resolve string keys from a JSON cache, fetching and persisting misses."""

    def __init__(
        self,
        name: str,
        path: Path,
        fetch: Callable[..., Awaitable[V]],
        *,
        validate: Callable[[Any], bool] | None = None,
        max_concurrency: int = RESOLVER_CONCURRENCY,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            name: Resource kind, used in log and error messages
            path: Backing JSON file
            fetch: Coroutine called as ``fetch(key, *fetch_args)`` on a miss
            validate: Optional schema check applied to every loaded entry
            max_concurrency: Permits bounding external fetches of this instance
        """
        self.name = name
        self.path = Path(path)
        self._fetch = fetch
        self._validate = validate
        self._entries: dict[str, V] | None = None
        self._load_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._permits = asyncio.Semaphore(max_concurrency)
        self._pending: dict[str, asyncio.Task[V]] = {}

    # ============= Public API =============

    async def resolve(self, key: str, *fetch_args: Any) -> V:
        """
        Return the value for ``key``, fetching it on a cache miss.

        Concurrent misses on the same key share a single fetch.

        Raises:
            FetchError: If the external source fails
            CacheIOError: If the backing file cannot be read or written
            CacheDecodeError: If the backing file holds invalid contents
        """
        entries = await self._ensure_loaded()
        if key in entries:
            return copy.deepcopy(entries[key])

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(key, *fetch_args))
            self._pending[key] = task
            task.add_done_callback(functools.partial(self._fetch_done, key))
        else:
            logger.debug(f"Waiting on in-flight {self.name} fetch for {key}")
        # Cancelling one caller must not cancel the fetch other callers share.
        value = await asyncio.shield(task)
        return copy.deepcopy(value)

    async def get_cached(self, key: str) -> V | None:
        """Return a cached value without ever fetching."""
        entries = await self._ensure_loaded()
        value = entries.get(key)
        return copy.deepcopy(value) if value is not None else None

    def __len__(self) -> int:
        return len(self._entries or {})

    # ============= Fetching =============

    async def _fetch_and_store(self, key: str, *fetch_args: Any) -> V:
        async with self._permits:
            value = await self._fetch(key, *fetch_args)
        await self._store(key, value)
        return value

    def _fetch_done(self, key: str, task: asyncio.Task) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]
        if not task.cancelled():
            # Retrieved here so failures nobody awaits are not reported as lost.
            task.exception()

    # ============= File Handling =============

    async def _ensure_loaded(self) -> dict[str, V]:
        if self._entries is not None:
            return self._entries
        async with self._load_lock:
            if self._entries is None:
                self._entries = await asyncio.to_thread(self._load_file)
                logger.debug(f"Loaded {len(self._entries)} {self.name} entries from {self.path}")
        return self._entries

    def _load_file(self) -> dict[str, V]:
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("{}", encoding="utf-8")
                return {}
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CacheIOError(f"Unable to open {self.name} cache at {self.path}: {exc}") from exc

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CacheDecodeError(f"Invalid JSON in {self.name} cache {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CacheDecodeError(f"{self.name} cache {self.path} is not a JSON object")
        if self._validate is not None:
            for key, value in data.items():
                if not self._validate(value):
                    raise CacheDecodeError(
                        f"{self.name} cache {self.path} has an invalid entry for {key!r}"
                    )
        return data

    async def _store(self, key: str, value: V) -> None:
        async with self._write_lock:
            entries = await self._ensure_loaded()
            entries[key] = copy.deepcopy(value)
            payload = json.dumps(entries, ensure_ascii=False)
            await asyncio.to_thread(self._write_file, payload)
        logger.info(f"{self.name} {key} downloaded")

    def _write_file(self, payload: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise CacheIOError(f"Unable to write {self.name} cache at {self.path}: {exc}") from exc
