"""Error kinds shared by the HTTP handlers.

Each kind carries the status code it is reported with and a message that is
safe to show to the caller. Anything meant only for the server log (provider
bodies, tracebacks) stays off ``message``.
"""


class PortalError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message}


class Unauthorized(PortalError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(PortalError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(PortalError):
    status_code = 404
    default_message = "Not found"


class InvalidRequest(PortalError):
    status_code = 400
    default_message = "Invalid request"


class ServiceUnavailable(PortalError):
    # Reported as 500: the callers treat missing configuration as a server fault.
    status_code = 500
    default_message = "Service not configured"


class UpstreamError(PortalError):
    status_code = 500
    default_message = "Upstream provider error"

    def __init__(self, message: str | None = None, upstream_status: int | None = None, upstream_body: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body


class InternalError(PortalError):
    status_code = 500
