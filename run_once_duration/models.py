"""
Minimal models for Kubernetes AdmissionReview, Pod and Namespace used by this webhook.
We intentionally parse only the fields we need and ignore unknowns so that
new Kubernetes fields don't break this app.

References:
- AdmissionReview request/response shape:
  https://kubernetes.io/docs/reference/access-authn-authz/extensible-admission-controllers/#request-and-response
- Pod (core/v1) API reference:
  https://kubernetes.io/docs/reference/generated/kubernetes-api/latest/#pod-v1-core
"""

from dataclasses import dataclass, field
from typing import Any, Optional

RESTART_ALWAYS = "Always"
RESTART_ON_FAILURE = "OnFailure"
RESTART_NEVER = "Never"

RUN_ONCE_RESTART_POLICIES = (RESTART_NEVER, RESTART_ON_FAILURE)


def _get(d: dict[str, Any], key: str, default):
    # Safe nested getter for dicts
    v = d.get(key)
    return v if isinstance(v, type(default)) else default


def _get_deadline(spec: dict[str, Any]) -> int | None:
    v = spec.get("activeDeadlineSeconds")
    # bool is an int subclass; a JSON true is not a deadline
    if isinstance(v, int) and not isinstance(v, bool):
        return v
    return None


@dataclass
class PodModel:
    name: str
    namespace: str
    restart_policy: str
    active_deadline_seconds: int | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> Optional["PodModel"]:
        if not isinstance(d, dict) or not d:
            return None
        kind = d.get("kind")
        if kind is not None and kind != "Pod":
            return None
        meta = _get(d, "metadata", {})
        spec = _get(d, "spec", {})
        return PodModel(
            name=_get(meta, "name", "") or _get(meta, "generateName", ""),
            namespace=_get(meta, "namespace", ""),
            restart_policy=_get(spec, "restartPolicy", ""),
            active_deadline_seconds=_get_deadline(spec),
        )


@dataclass
class ResourceModel:
    group: str = ""
    version: str = ""
    resource: str = ""

    @staticmethod
    def from_dict(d: Any) -> "ResourceModel":
        if not isinstance(d, dict):
            return ResourceModel()
        return ResourceModel(
            group=_get(d, "group", ""),
            version=_get(d, "version", ""),
            resource=_get(d, "resource", ""),
        )


@dataclass
class AdmissionRequestModel:
    uid: str
    obj: PodModel | None
    resource: ResourceModel = field(default_factory=ResourceModel)
    sub_resource: str = ""
    namespace: str = ""
    name: str = ""
    operation: str = "CREATE"

    @staticmethod
    def from_dict(d: dict[str, Any]) -> Optional["AdmissionRequestModel"]:
        if not isinstance(d, dict):
            return None
        obj = PodModel.from_dict(d.get("object"))
        namespace = _get(d, "namespace", "")
        if not namespace and obj is not None:
            namespace = obj.namespace
        name = _get(d, "name", "")
        if not name and obj is not None:
            name = obj.name
        return AdmissionRequestModel(
            uid=str(d.get("uid", "")),
            obj=obj,
            resource=ResourceModel.from_dict(d.get("resource")),
            sub_resource=_get(d, "subResource", ""),
            namespace=namespace,
            name=name,
            operation=str(d.get("operation", "CREATE")),
        )

    def is_pod(self) -> bool:
        return self.resource.group == "" and self.resource.resource == "pods"


@dataclass
class AdmissionReviewModel:
    request: AdmissionRequestModel

    @staticmethod
    def from_dict(d: dict[str, Any]) -> Optional["AdmissionReviewModel"]:
        if not isinstance(d, dict):
            return None
        req_raw = d.get("request")
        req = (
            AdmissionRequestModel.from_dict(req_raw)
            if isinstance(req_raw, dict)
            else None
        )
        if req is None:
            return None
        return AdmissionReviewModel(request=req)


@dataclass
class NamespaceModel:
    name: str
    annotations: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "NamespaceModel":
        return NamespaceModel(
            name=_get(d, "name", ""),
            annotations=_get(d, "annotations", {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "annotations": dict(self.annotations)}
