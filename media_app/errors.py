"""
Error taxonomy for the media service.

Services raise these; a single exception handler in main.py turns them
into JSON responses using the status code carried by each class.
"""

from fastapi import status


class MediaAppError(Exception):
    """Base class for every error the service reports to a caller"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(MediaAppError):
    """Asset or streaming link does not exist (or was already swept)"""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class LinkExpiredError(MediaAppError):
    """Streaming link existed but its TTL has elapsed"""

    status_code = status.HTTP_410_GONE
    default_message = "Streaming URL has expired"


class StorageError(MediaAppError):
    """
    The durable asset/view store failed.

    The original cause is kept on ``__cause__`` for logging; clients only
    ever see the generic message.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error"


class MediaValidationError(MediaAppError):
    """Malformed asset input, rejected before any write"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid media asset"
