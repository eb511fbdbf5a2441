import logging

from flask import Blueprint, jsonify, request

from .admission import RunOnceDuration
from .errors import AdmissionDenied
from .helpers import make_admission_response, patch_active_deadline
from .models import AdmissionReviewModel

log = logging.getLogger("run-once-duration")


def create_routes(plugin: RunOnceDuration):
    bp = Blueprint("webhook", __name__)

    @bp.route("/health", methods=["GET"])
    def health():
        return {"status": "healthy"}, 200

    @bp.route("/mutate", methods=["POST"])
    def mutate():
        uid = ""
        try:
            review_json = request.get_json(silent=True)

            admission = AdmissionReviewModel.from_dict(review_json or {})
            if admission is None:
                log.warning("Invalid AdmissionReview payload for /mutate")
                return jsonify(make_admission_response(uid="", allowed=False)), 400

            req = admission.request
            uid = req.uid

            try:
                mutated = plugin.admit(req)
            except AdmissionDenied as e:
                log.warning(
                    "Denied ns=%s pod=%s operation=%s: %s",
                    req.namespace,
                    req.name,
                    req.operation,
                    e.detail,
                )
                return jsonify(
                    make_admission_response(
                        uid,
                        False,
                        message=str(e),
                        code=e.code,
                        reason=e.reason,
                    )
                )

            if not mutated:
                return jsonify(make_admission_response(uid, True))

            patch = patch_active_deadline(req.obj.active_deadline_seconds)
            return jsonify(make_admission_response(uid, True, patch))
        except Exception:
            log.error("Error in /mutate", exc_info=True)
            return (
                jsonify(
                    make_admission_response(
                        uid=uid,
                        allowed=False,
                        message="internal error evaluating RunOnceDuration policy",
                        code=500,
                    )
                ),
                500,
            )

    return bp
