import base64
import json
import logging
import re
from typing import Any

log = logging.getLogger("run-once-duration")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# strconv.ParseInt(s, 10, 64) syntax: optional sign, ASCII digits, nothing else
_INT64_RE = re.compile(r"[+-]?[0-9]+")


def parse_int64(raw: str) -> int:
    """
    Parse a base-10 signed 64-bit integer the way the Kubernetes API tooling does.
    Raises ValueError for syntax errors and out-of-range values.
    """
    if not isinstance(raw, str) or not _INT64_RE.fullmatch(raw):
        raise ValueError(f"parsing {raw!r}: invalid syntax")
    value = int(raw, 10)
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"parsing {raw!r}: value out of range")
    return value


def validate_kubernetes_name(name: str | None, field_name: str = "name") -> tuple[bool, str | None]:
    """
    Validate a Kubernetes object name used as a lookup or cache key:
    - Must be 1-253 characters
    - Must be a string
    Returns (is_valid, error_message).
    """
    if name is None or name == "":
        return False, f"{field_name} cannot be empty or None"

    if not isinstance(name, str):
        return False, f"{field_name} must be a string, got: {type(name).__name__}"

    if len(name) > 253:
        return False, f"{field_name} must be 253 characters or less, got: {len(name)}"

    return True, None


def make_admission_response(
    uid: str,
    allowed: bool = True,
    patch: list[dict[str, Any]] | None = None,
    message: str | None = None,
    code: int | None = None,
    reason: str | None = None,
) -> dict[str, Any]:
    """Return the AdmissionReview the webhook sends to K8s to allow, patch or deny a Pod."""
    resp: dict[str, Any] = {"uid": uid, "allowed": allowed}

    if patch:
        resp["patchType"] = "JSONPatch"
        resp["patch"] = base64.b64encode(json.dumps(patch).encode()).decode()

    if message is not None:
        status: dict[str, Any] = {"message": message}
        if code is not None:
            status["code"] = code
        if reason is not None:
            status["reason"] = reason
        resp["status"] = status

    return {
        "apiVersion": "admission.k8s.io/v1",
        "kind": "AdmissionReview",
        "response": resp,
    }


def patch_active_deadline(seconds: int) -> list[dict[str, Any]]:
    """Produce a JSONPatch that sets the pod's activeDeadlineSeconds, replacing any submitted value."""
    return [
        {
            "op": "add",
            "path": "/spec/activeDeadlineSeconds",
            "value": seconds,
        }
    ]
