"""
Cluster HTTP client helpers.
Shared httpx client construction and error mapping for the cluster REST API.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from rolloverwait.core.domain.errors import OperationError

# HTTP client configuration
DEFAULT_TIMEOUT = 30.0  # seconds


class ClusterClientError(OperationError):
    """Transport failure or error response from the cluster."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        details: Dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if error_type is not None:
            details["error_type"] = error_type
        super().__init__(message, cause=cause, details=details)
        self.status_code = status_code
        self.error_type = error_type


def build_async_client(
    base_url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the AsyncClient used by the cluster adapters.

    Args:
        base_url: Cluster URL, e.g. http://127.0.0.1:9200
        timeout: Request timeout in seconds
        transport: Optional transport override (tests use httpx.MockTransport)
    """
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=httpx.Timeout(timeout),
        headers={"Accept": "application/json"},
        transport=transport,
    )


def raise_for_cluster_error(response: httpx.Response) -> None:
    """Raise ClusterClientError for any response with status >= 400."""
    if response.status_code < 400:
        return
    error_type = None
    reason = response.text
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            error_type = error.get("type")
            reason = error.get("reason", reason)
        elif isinstance(error, str):
            reason = error
    raise ClusterClientError(
        f"cluster returned {response.status_code}: {reason}",
        status_code=response.status_code,
        error_type=error_type,
    )


async def send(client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> Any:
    """
    Issue one request and return the decoded JSON body.

    No retries: retry policy belongs to the step sequencer.

    Raises:
        ClusterClientError: On timeout, transport failure, error status or non-JSON body
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        raise ClusterClientError(f"request to {url} timed out: {e}", cause=e) from e
    except httpx.RequestError as e:
        raise ClusterClientError(f"cluster unavailable: {e}", cause=e) from e

    raise_for_cluster_error(response)
    try:
        return response.json()
    except ValueError as e:
        raise ClusterClientError(
            f"cluster returned a non-JSON body for {url}",
            status_code=response.status_code,
            cause=e,
        ) from e
