"""
Shared retry policy for upstream HTTP calls
"""
import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from storefront.config import Settings


def upstream_retry(config: Settings):
    """
    Build the retry decorator for one client

    Retries connection establishment failures only; the request has not
    reached the upstream yet.
    """
    return retry(
        stop=stop_after_attempt(max(config.UPSTREAM_MAX_ATTEMPTS, 1)),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(httpx.ConnectError),
        reraise=True
    )


def error_details(response: httpx.Response):
    """Best-effort decode of an upstream error body"""
    try:
        return response.json()
    except ValueError:
        return response.text
