"""
Error taxonomy for the Sustainability Scanner.
Every error maps to an HTTP status and a stable error code.
"""

from typing import Optional


class ScannerError(Exception):
    """Base error converted to a JSON error body at the handler boundary."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, cause: Optional[BaseException | str] = None):
        self.message = message
        self.cause = cause
        super().__init__(self.detail)

    @property
    def detail(self) -> str:
        """Message with the underlying cause appended."""
        if self.cause is None or str(self.cause) == "":
            return self.message
        return f"{self.message}: {self.cause}"


class ValidationError(ScannerError):
    """Malformed or missing request field."""
    status_code = 400
    error_code = "validation_error"


class ConfigurationError(ScannerError):
    """Required deployment setting is absent."""
    status_code = 500
    error_code = "configuration_error"


class UpstreamError(ScannerError):
    """Downstream service call failed."""
    status_code = 500
    error_code = "upstream_error"


class TransportError(UpstreamError):
    """Downstream service could not be reached."""
    error_code = "transport_error"


class DecodeError(ScannerError):
    """Downstream response does not match the expected shape."""
    status_code = 500
    error_code = "decode_error"

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException | str] = None,
        raw_text: Optional[str] = None
    ):
        self.raw_text = raw_text
        super().__init__(message, cause)
