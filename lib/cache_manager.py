"""Centralized cache utilities (TTLCache settings, key builders & locked access)."""
from __future__ import annotations

import os
import threading
from typing import Any

from cachetools import TTLCache

# Session cache settings
SESSION_CACHE_VERSION = int(os.getenv("SESSION_CACHE_VERSION", "1"))
SESSION_CACHE_MAXSIZE = int(os.getenv("SESSION_CACHE_MAXSIZE", "256"))
SESSION_CACHE_TTL_S = int(os.getenv("SESSION_CACHE_TTL_S", "3600"))

# Lazy-initialized caches
_session_cache: TTLCache | None = None

# TTLCache はスレッドセーフではない。sync ルートはスレッドプールで動くので、
# 生成も読み書きもこのロックの中で行う
_session_lock = threading.RLock()


def get_session_cache() -> TTLCache:
    global _session_cache
    with _session_lock:
        if _session_cache is None:
            _session_cache = TTLCache(maxsize=SESSION_CACHE_MAXSIZE, ttl=SESSION_CACHE_TTL_S)
        return _session_cache


def build_session_cache_key(session_id: str) -> str:
    return f"session:{SESSION_CACHE_VERSION}:{session_id}"


def session_cache_get(session_id: str) -> Any:
    with _session_lock:
        return get_session_cache().get(build_session_cache_key(session_id))


def session_cache_set(session_id: str, value: Any) -> None:
    with _session_lock:
        get_session_cache()[build_session_cache_key(session_id)] = value


def session_cache_pop(session_id: str) -> Any:
    with _session_lock:
        return get_session_cache().pop(build_session_cache_key(session_id), None)
