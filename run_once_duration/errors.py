class NamespaceLookupError(Exception):
    """The namespace of the pod could not be read."""


class MalformedOverrideError(ValueError):
    """The namespace override annotation is not a base-10 int64."""


class AdmissionDenied(Exception):
    """Raised to reject the whole admission request."""

    code = 403
    reason = "Forbidden"

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        self.detail = message
        super().__init__(f'pods "{name}" is forbidden: {message}')
