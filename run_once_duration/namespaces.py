import logging
from typing import Any

from kubernetes.client.exceptions import ApiException

from .errors import NamespaceLookupError
from .helpers import validate_kubernetes_name
from .models import NamespaceModel
from .store.interface import KeyValueStore

log = logging.getLogger("run-once-duration")


class NamespaceLister:
    def get_namespace(self, name: str) -> NamespaceModel:
        """
        Return a snapshot of the namespace's metadata.
        Raises NamespaceLookupError if it cannot be read.
        """
        raise NotImplementedError


class KubernetesNamespaceCache(NamespaceLister):
    """Read-through namespace lookups against the API server, cached in the datastore."""

    def __init__(
        self,
        core: Any,
        datastore: KeyValueStore | None = None,
        ttl_seconds: int = 30,
        timeout_seconds: int = 5,
    ) -> None:
        self._core = core
        self._datastore = datastore
        self._ttl_seconds = ttl_seconds
        self._timeout_seconds = timeout_seconds

    @staticmethod
    def _key(name: str) -> str:
        return f"namespace:{name}"

    def _cached(self, name: str) -> tuple[bool, NamespaceModel | None]:
        """Return (cache_reachable, snapshot)."""
        if self._datastore is None:
            return False, None
        try:
            snapshot = self._datastore.get(self._key(name))
        except Exception as e:
            log.warning("Namespace cache read failed for ns=%s: %s", name, e)
            return False, None
        if not isinstance(snapshot, dict):
            return True, None
        return True, NamespaceModel.from_dict(snapshot)

    def _store(self, ns: NamespaceModel) -> None:
        if self._datastore is None:
            return
        try:
            self._datastore.set(
                self._key(ns.name), ns.to_dict(), ttl_seconds=self._ttl_seconds
            )
        except Exception as e:
            log.warning("Namespace cache write failed for ns=%s: %s", ns.name, e)

    def get_namespace(self, name: str) -> NamespaceModel:
        is_valid, error = validate_kubernetes_name(name, "namespace")
        if not is_valid:
            raise NamespaceLookupError(error)

        reachable, cached = self._cached(name)
        if cached is not None:
            log.debug("Namespace cache hit for ns=%s", name)
            return cached

        try:
            ns = self._core.read_namespace(
                name, _request_timeout=self._timeout_seconds
            )
        except ApiException as e:
            raise NamespaceLookupError(
                f'namespace "{name}": {e.status} {e.reason}'
            ) from e
        except Exception as e:
            raise NamespaceLookupError(f'namespace "{name}": {e}') from e

        meta = ns.metadata
        snapshot = NamespaceModel(
            name=meta.name or name,
            annotations=dict(meta.annotations or {}),
        )
        # Skip the write when the read already failed
        if reachable:
            self._store(snapshot)
        return snapshot
