# mytaxy/services/errors.py
from typing import Optional


class ServiceError(Exception):
    """Base for errors the HTTP layer turns into a status code and message."""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
