from typing import Any, Dict, List, Optional


class GatewayError(Exception):
    """
    Base class for failures the gateway reports to clients.
    status_code is the HTTP status used when strict status codes are enabled.
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(GatewayError):

    status_code = 400

    def __init__(self, violations: List[Dict[str, Any]]):
        super().__init__("Request validation failed")
        self.violations = violations


class PayloadTooLarge(GatewayError):

    status_code = 413

    def __init__(self, limit: int):
        super().__init__(f"File too large: limit is {limit} bytes")
        self.limit = limit


class StagingIOError(GatewayError):
    pass


class UpstreamError(GatewayError):
    """
    Any failure reported by (or while talking to) the assistant service.
    upstream_status is None when no HTTP response was received.
    """

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class UpstreamNotFound(UpstreamError):

    status_code = 404


class UpstreamTimeout(UpstreamError):

    status_code = 504
