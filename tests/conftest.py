from typing import Any, Dict

import pytest

from run_once_duration.errors import NamespaceLookupError
from run_once_duration.models import NamespaceModel
from run_once_duration.namespaces import NamespaceLister

OVERRIDE = "openshift.io/active-deadline-seconds-override"


class FakeLister(NamespaceLister):
	def __init__(self, namespaces: Dict[str, Dict[str, str] | None]):
		self._namespaces = namespaces
		self.calls = []

	def get_namespace(self, name: str) -> NamespaceModel:
		self.calls.append(name)
		if name not in self._namespaces:
			raise NamespaceLookupError(f'namespaces "{name}" not found')
		return NamespaceModel(name=name, annotations=self._namespaces[name] or {})


@pytest.fixture
def lister() -> FakeLister:
	return FakeLister(
		{
			"batch-ns": {OVERRIDE: "120"},
			"plain-ns": {},
			"no-annotations": None,
			"bad-ns": {OVERRIDE: "abc"},
			"other-annotations": {"team": "data"},
		}
	)


def pod_dict(
	name: str = "p1",
	ns: str = "batch-ns",
	restart_policy: str | None = "OnFailure",
	deadline: int | None = None,
) -> Dict[str, Any]:
	spec: Dict[str, Any] = {"containers": [{"name": "main", "image": "busybox"}]}
	if restart_policy is not None:
		spec["restartPolicy"] = restart_policy
	if deadline is not None:
		spec["activeDeadlineSeconds"] = deadline
	return {
		"apiVersion": "v1",
		"kind": "Pod",
		"metadata": {"name": name, "namespace": ns},
		"spec": spec,
	}


def admission_request(
	pod: Any,
	uid: str = "u1",
	operation: str = "CREATE",
	resource: str = "pods",
	sub_resource: str | None = None,
	ns: str | None = None,
) -> Dict[str, Any]:
	req: Dict[str, Any] = {
		"uid": uid,
		"operation": operation,
		"resource": {"group": "", "version": "v1", "resource": resource},
		"object": pod,
	}
	if isinstance(pod, dict) and ns is None:
		ns = pod.get("metadata", {}).get("namespace")
	if ns is not None:
		req["namespace"] = ns
	if sub_resource is not None:
		req["subResource"] = sub_resource
	return req
