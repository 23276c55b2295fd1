from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from loguru import logger

__all__ = ["HtmlParserWorker"]

T = TypeVar("T")


class HtmlParserWorker:
    """Runs HTML parsing on one dedicated thread, away from the event loop.

    Parse functions receive raw markup and must return plain Python data;
    parsed document trees never leave the worker thread.
    """

    def __init__(self, name: str = "html-parser") -> None:
        self._name = name
        self._executor: ThreadPoolExecutor | None = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=name
        )

    async def run(self, func: Callable[..., T], *args: Any) -> T:
        """Submit ``func(*args)`` to the parser thread and await its result."""
        if self._executor is None:
            raise RuntimeError(f"{self._name} worker has been shut down")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args))

    def is_stopped(self) -> bool:
        return self._executor is None

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and wait for the parser thread to finish."""
        if self._executor is None:
            return
        logger.debug(f"Shutting down {self._name} worker")
        self._executor.shutdown(wait=wait, cancel_futures=True)
        self._executor = None

    def __enter__(self) -> HtmlParserWorker:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
