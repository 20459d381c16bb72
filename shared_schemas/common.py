"""
Common schemas and utilities shared across all services.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """
    Standard error response.

    `error` carries the failure message with the underlying cause appended.
    """
    success: bool = False
    error: str
    error_code: str | None = None
