import json
from typing import Any

import redis

from .interface import KeyValueStore


class RedisStore(KeyValueStore):
    def __init__(
        self,
        url: str,
        default_ttl_seconds: int = 30,
        socket_timeout_seconds: float | None = None,
    ) -> None:
        self._client = redis.Redis.from_url(
            url,
            socket_timeout=socket_timeout_seconds,
            socket_connect_timeout=socket_timeout_seconds,
        )
        self._default_ttl_seconds = max(1, int(default_ttl_seconds))

    def get(self, key: str) -> Any | None:
        val_bytes = self._client.get(key)
        if val_bytes is None:
            return None

        try:
            return json.loads(val_bytes)
        except ValueError:
            # Undecodable entries are treated as a miss and overwritten on next set
            return None

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        val_str = json.dumps(value, separators=(",", ":"))
        ttl = (
            self._default_ttl_seconds
            if not ttl_seconds or ttl_seconds <= 0
            else int(ttl_seconds)
        )
        self._client.setex(key, ttl, val_str)
