"""Client-side error taxonomy.

Every failed call surfaces as a ClientError, so callers handle one type:
- ApiError: the server answered but said no (non-2xx or success=false)
- NetworkFailure: no usable answer (connect error, timeout, bad body)
"""

from typing import Optional


class ClientError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ApiError(ClientError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkFailure(ClientError):
    pass
