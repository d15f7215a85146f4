#services/exceptions.py
from typing import Any, Dict, Optional


class FlightProxyError(Exception):
    """Base error rendered to clients as ``{"error": ..., "message": ...}``."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str, *, status_code: Optional[int] = None, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error is not None:
            self.error = error

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class MissingParameterError(FlightProxyError):
    status_code = 400
    error = "Missing Parameter"


class InvalidParameterError(FlightProxyError):
    status_code = 400
    error = "Invalid Parameter"


class ConfigurationError(FlightProxyError):
    status_code = 500
    error = "API key not configured"


class UpstreamError(FlightProxyError):
    status_code = 500
    error = "Flight API Error"


class InternalError(FlightProxyError):
    pass
