"""
Error taxonomy shared by the core services and the HTTP layer.

Services raise these; wision.main maps them to JSON responses of the form
{"error": message} with the status code carried by the exception.
"""


class WisionError(Exception):
    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class Unauthorized(WisionError):
    status_code = 401
    message = "Authorization required"


class NotFound(WisionError):
    status_code = 404
    message = "Not found"


class AlreadySubmitted(WisionError):
    status_code = 400
    message = "Challenge already submitted today"


class Conflict(WisionError):
    status_code = 400
    message = "Already exists"


class InvalidState(WisionError):
    status_code = 500
    message = "Invalid server state"


class UpstreamUnavailable(WisionError):
    """Raised client-side when the backend cannot be reached."""
    status_code = 503
    message = "Backend unavailable"
