"""Thin wrappers over a ``curl_cffi`` async session."""

from __future__ import annotations

from typing import Any

from curl_cffi.requests import AsyncSession
from curl_cffi.requests.exceptions import RequestException
from loguru import logger

from utils.constants import REQUEST_TIMEOUT_SECONDS
from utils.errors import FetchError

__all__ = ["create_session", "fetch_json", "fetch_text"]


def create_session(timeout: float = REQUEST_TIMEOUT_SECONDS) -> AsyncSession:
    """Return the session shared by every source during one run."""
    return AsyncSession(impersonate="chrome", timeout=timeout)


async def _request(session: Any, method: str, url: str, **kwargs: Any) -> Any:
    try:
        response = await session.request(method, url, **kwargs)
        response.raise_for_status()
    except RequestException as exc:
        logger.error(f"{method} {url} failed: {exc}")
        raise FetchError(f"{method} {url} failed: {exc}") from exc
    return response


async def fetch_text(
    session: Any,
    url: str,
    *,
    method: str = "GET",
    data: dict[str, str] | None = None,
) -> str:
    response = await _request(session, method, url, data=data)
    return response.text


async def fetch_json(session: Any, url: str, *, params: dict[str, str] | None = None) -> Any:
    response = await _request(
        session, "GET", url, params=params, headers={"Accept": "application/json"}
    )
    try:
        return response.json()
    except ValueError as exc:
        raise FetchError(f"GET {url} returned invalid JSON: {exc}") from exc
