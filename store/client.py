"""
Client code for Redis access, with an in-memory fallback used while Redis is unavailable.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import time
from typing import Any, Awaitable, Optional, TypeVar

import redis.asyncio as aioredis

from config import REDIS_URL, settings

log = logging.getLogger(__name__)

_REDIS_OP_TIMEOUT_SECONDS = 0.5
_REDIS_SCAN_TIMEOUT_SECONDS = 1.0

T = TypeVar("T")

_redis_client: Any = None
_fallback: dict[str, str] = {}
_using_fallback = False
_init_lock = asyncio.Lock()
_retry_after_monotonic: float = 0.0


def _remember(key: str, value: str) -> None:
    if key in _fallback or len(_fallback) < settings.store_fallback_max_items:
        _fallback[key] = value
    else:
        log.debug("In-memory store full, dropping write to %s", key)


async def get_redis() -> Any:
    global _redis_client, _using_fallback, _retry_after_monotonic

    if _redis_client is not None:
        return _redis_client
    if time.monotonic() < _retry_after_monotonic:
        _using_fallback = True
        return None

    async with _init_lock:
        if _redis_client is not None:
            return _redis_client
        if time.monotonic() < _retry_after_monotonic:
            _using_fallback = True
            return None
        try:
            client = aioredis.from_url(
                REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=_REDIS_OP_TIMEOUT_SECONDS,
                socket_timeout=_REDIS_OP_TIMEOUT_SECONDS,
            )
            await asyncio.wait_for(client.ping(), timeout=_REDIS_OP_TIMEOUT_SECONDS)
        except Exception as exc:
            _retry_after_monotonic = time.monotonic() + max(0.0, settings.store_redis_retry_cooldown_seconds)
            if not _using_fallback:
                log.warning("Redis unavailable (%s), using in-memory store", exc)
                _using_fallback = True
            return None
        _redis_client = client
        _retry_after_monotonic = 0.0
        _using_fallback = False
        log.info("Redis connected: %s", REDIS_URL)
        return _redis_client


def _matching(pattern: str) -> list[str]:
    return sorted(k for k in _fallback if fnmatch.fnmatch(k, pattern))


async def _bounded(awaitable: Awaitable[T], timeout: float = _REDIS_OP_TIMEOUT_SECONDS) -> T:
    return await asyncio.wait_for(awaitable, timeout=timeout)


async def redis_get(key: str) -> Optional[str]:
    client = await get_redis()
    if client is not None:
        try:
            return await _bounded(client.get(key))
        except Exception as exc:
            log.debug("Redis GET %s failed, reading memory: %s", key, exc)
    return _fallback.get(key)


async def redis_set(key: str, value: str, ttl: Optional[int] = None) -> None:
    client = await get_redis()
    if client is not None:
        try:
            if ttl:
                await _bounded(client.setex(key, ttl, value))
            else:
                await _bounded(client.set(key, value))
            return
        except Exception as exc:
            log.debug("Redis SET %s failed, writing memory: %s", key, exc)
    _remember(key, value)


async def redis_delete(key: str) -> None:
    client = await get_redis()
    if client is not None:
        try:
            await _bounded(client.delete(key))
            return
        except Exception as exc:
            log.debug("Redis DEL %s failed, deleting from memory: %s", key, exc)
    _fallback.pop(key, None)


async def redis_scan(pattern: str) -> list[str]:
    client = await get_redis()
    if client is not None:
        async def _collect() -> list[str]:
            return [key async for key in client.scan_iter(match=pattern)]

        try:
            return sorted(await _bounded(_collect(), timeout=_REDIS_SCAN_TIMEOUT_SECONDS))
        except Exception as exc:
            log.debug("Redis SCAN %s failed, scanning memory: %s", pattern, exc)
    return _matching(pattern)


def is_using_fallback() -> bool:
    return _using_fallback
