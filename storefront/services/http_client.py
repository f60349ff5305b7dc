from __future__ import annotations

"""Async HTTP helper for JSON GETs against third-party APIs.

Single attempt, explicit timeout. Every transport, status or decoding problem
is raised as HttpError so callers only have one failure type to handle.
"""
from typing import Any, Dict, Mapping, Optional

import httpx


class HttpError(Exception):
    pass


async def get_json(
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url, params=params)
    except httpx.HTTPError as e:
        raise HttpError(f"Failed to fetch JSON from {url}: {e}") from e
    if not resp.is_success:
        raise HttpError(f"HTTP {resp.status_code} for {url}")
    try:
        data = resp.json()
    except ValueError as e:
        raise HttpError(f"Invalid JSON from {url}: {e}") from e
    if not isinstance(data, dict):
        raise HttpError(f"Unexpected JSON payload from {url}")
    return data
