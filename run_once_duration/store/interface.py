from typing import Any


class KeyValueStore:
    def get(self, key: str) -> Any | None:
        """
        Return the decoded value if present and not expired; otherwise None.
        """
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """
        Store a JSON-serializable value that expires after ttl_seconds.
        """
        raise NotImplementedError
