"""
RunOnceDuration admission policy.

Bounds the lifetime of run-once pods (restartPolicy Never or OnFailure) by
setting spec.activeDeadlineSeconds. Precedence, first match wins:

1. the namespace override annotation, when present;
2. the cluster-wide default from PolicyConfig, when configured;
3. leave the pod as submitted.

A malformed override or a failed namespace lookup rejects the request.
"""

import logging

from .config import DEFAULT_OVERRIDE_ANNOTATION, PolicyConfig
from .errors import AdmissionDenied, MalformedOverrideError, NamespaceLookupError
from .helpers import parse_int64
from .models import RUN_ONCE_RESTART_POLICIES, AdmissionRequestModel, PodModel
from .namespaces import NamespaceLister

log = logging.getLogger("run-once-duration")

HANDLED_OPERATIONS = ("CREATE", "UPDATE")


def resolve_namespace_override(
    namespace: str,
    lister: NamespaceLister,
    pod: PodModel,
    annotation: str = DEFAULT_OVERRIDE_ANNOTATION,
) -> bool:
    """Apply the namespace's deadline override to the pod. Returns True if one was applied."""
    try:
        ns = lister.get_namespace(namespace)
    except Exception as e:
        raise NamespaceLookupError(f"error looking up pod namespace: {e}") from e

    if not ns.annotations:
        return False
    override = ns.annotations.get(annotation)
    if override is None:
        return False

    try:
        seconds = parse_int64(override)
    except ValueError as e:
        raise MalformedOverrideError(
            f"cannot parse the activeDeadlineSeconds override ({override}) "
            f"for namespace {ns.name}: {e}"
        ) from e

    pod.active_deadline_seconds = seconds
    return True


def decide(
    request: AdmissionRequestModel,
    policy: PolicyConfig | None,
    lister: NamespaceLister,
    annotation: str = DEFAULT_OVERRIDE_ANNOTATION,
) -> bool:
    """
    Decide the pod's activeDeadlineSeconds for one admission request.

    Returns True when request.obj was mutated, False when the request is
    not applicable. Raises AdmissionDenied to reject the request.
    """
    if policy is None or not request.is_pod() or request.sub_resource:
        return False

    pod = request.obj
    if pod is None:
        raise AdmissionDenied(request.name, "unexpected object: not a Pod")

    if pod.restart_policy not in RUN_ONCE_RESTART_POLICIES:
        return False

    try:
        applied = resolve_namespace_override(
            request.namespace, lister, pod, annotation
        )
    except (NamespaceLookupError, MalformedOverrideError) as e:
        raise AdmissionDenied(request.name, str(e)) from e

    if applied:
        log.info(
            "Applied namespace override ns=%s pod=%s activeDeadlineSeconds=%s",
            request.namespace,
            request.name,
            pod.active_deadline_seconds,
        )
        return True

    if policy.default_active_deadline_seconds is not None:
        pod.active_deadline_seconds = policy.default_active_deadline_seconds
        log.info(
            "Applied cluster default ns=%s pod=%s activeDeadlineSeconds=%s",
            request.namespace,
            request.name,
            pod.active_deadline_seconds,
        )
        return True

    return False


class RunOnceDuration:
    """The admission plugin: decide() bound to its policy and namespace lister."""

    def __init__(
        self,
        policy: PolicyConfig | None,
        lister: NamespaceLister | None = None,
        annotation: str = DEFAULT_OVERRIDE_ANNOTATION,
    ) -> None:
        self.policy = policy
        self.lister = lister
        self.annotation = annotation

    def handles(self, operation: str) -> bool:
        return operation in HANDLED_OPERATIONS

    def validate(self) -> None:
        if self.lister is None:
            raise RuntimeError("RunOnceDuration plugin requires a namespace lister")

    def admit(self, request: AdmissionRequestModel) -> bool:
        if not self.handles(request.operation):
            return False
        return decide(request, self.policy, self.lister, self.annotation)
