import openai
from relayable.relay.errors import UpstreamError, UpstreamNotFound, UpstreamTimeout


def upstream_error(error: openai.APIError) -> UpstreamError:
    """
    Wraps an openai client error so callers never see openai/httpx types.
    """
    if isinstance(error, openai.APITimeoutError):
        return UpstreamTimeout("Request to the assistant service timed out")
    if isinstance(error, openai.APIConnectionError):
        return UpstreamError(f"Could not reach the assistant service: {error.message}")
    status_code = getattr(error, "status_code", None)
    if isinstance(error, openai.NotFoundError):
        return UpstreamNotFound(error.message, status_code)
    return UpstreamError(error.message, status_code)
