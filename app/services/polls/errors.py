"""Errors raised by the poll services.

Each error carries a machine-readable ``kind`` and the HTTP status the
routes answer with.
"""


class PollServiceError(Exception):
    status_code = 400
    kind = "error"

    def __init__(self, message, kind=None):
        self.message = message
        if kind is not None:
            self.kind = kind
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.message, "kind": self.kind}


class ValidationError(PollServiceError):
    """Malformed poll definition."""

    kind = "invalid-payload"


class NotFoundError(PollServiceError):
    status_code = 404
    kind = "not-found"

    def __init__(self, message="Poll not found", kind=None):
        super().__init__(message, kind)


class OutOfRangeError(PollServiceError):
    kind = "out-of-range"


class InvalidSelectionError(PollServiceError):
    kind = "invalid-selection"


class AlreadyVotedError(PollServiceError):
    status_code = 409
    kind = "already-voted"


class ResultsHiddenError(PollServiceError):
    status_code = 403
    kind = "results-hidden"


class PersistenceError(PollServiceError):
    """Backing-store failure. The caller only ever sees a generic message."""

    status_code = 500
    kind = "persistence"

    def __init__(self, message="Internal server error", kind=None):
        super().__init__(message, kind)
