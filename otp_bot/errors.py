"""
Error taxonomy shared by the dispatch boundary.

Every error carries the HTTP status it maps to and a message that is safe to
return to the caller. Internal exception details never go into `message`.
"""
from typing import Optional


class RelayError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidPhone(RelayError):
    status_code = 400
    default_message = "Invalid phone"


class Forbidden(RelayError):
    status_code = 403
    default_message = "Forbidden"


class ServiceUnavailable(RelayError):
    status_code = 503
    default_message = "WhatsApp client not ready"


class BadRequest(RelayError):
    status_code = 400
    default_message = "Bad request"


class DispatchFailure(RelayError):
    status_code = 500
    default_message = "Failed to send message"
