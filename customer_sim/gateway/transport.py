"""Shared HTTP plumbing for the gateway clients."""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class GatewayError(RuntimeError):
    """Raised when a gateway call fails: unreachable, timeout, bad status or body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def join_url(base_url: str, path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def error_detail(response: httpx.Response) -> str:
    """Best-effort human-readable reason from an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict):
        parts = [str(body[key]) for key in ("error", "message") if body.get(key)]
        if parts:
            return ": ".join(parts)
    return response.reason_phrase


async def post_json(
    client: httpx.AsyncClient, url: str, body: dict[str, Any], *, what: str
) -> Any:
    """POST ``body`` and return the decoded JSON, mapping failures to GatewayError."""
    try:
        response = await client.post(url, json=body)
    except httpx.TimeoutException as exc:
        logger.error("%s request timed out: %s", what, url)
        raise GatewayError(f"{what} request timed out") from exc
    except httpx.HTTPError as exc:
        logger.error("%s request failed: %s", what, exc)
        raise GatewayError(f"{what} request failed: {exc}") from exc
    except Exception as exc:
        # Connection setup can fail below httpx (bad port, resolver, task groups).
        logger.error("%s request failed unexpectedly: %r", what, exc)
        raise GatewayError(f"{what} request failed: {exc!r}") from exc

    if response.is_error:
        detail = error_detail(response)
        logger.error("%s returned %d: %s", what, response.status_code, detail)
        raise GatewayError(
            f"{what} returned {response.status_code}: {detail}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as exc:
        raise GatewayError(f"{what} returned a non-JSON body") from exc
