"""
Shared aiohttp helper for the REST adapters.

Turns transport failures, timeouts and non-2xx answers into
CollaboratorError so adapters only deal with decoded JSON.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from core.domain.exceptions import CollaboratorError, MalformedResponseError


logger = logging.getLogger(__name__)


async def request_json(
    method: str,
    url: str,
    *,
    service: str,
    timeout_seconds: float,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """
    Perform an HTTP request and decode the JSON body.

    Args:
        method: HTTP method
        url: Absolute URL
        service: Human-readable service name used in error messages
        timeout_seconds: Total timeout for the call
        params: Query parameters
        json: JSON body
        headers: Extra headers

    Returns:
        Decoded JSON payload

    Raises:
        CollaboratorError: On timeout, transport error or non-2xx status
        MalformedResponseError: If the body is not JSON
    """
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.request(
                method, url, params=params, json=json, headers=headers
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    logger.warning(f"{service} API error: {response.status} - {body[:200]}")
                    raise CollaboratorError(
                        f"{service} API returned status {response.status}: {_error_detail(body)}",
                        status_code=response.status,
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponseError(f"{service} API returned invalid JSON") from e
    except asyncio.TimeoutError as e:
        raise CollaboratorError(f"{service} API timed out after {timeout_seconds:g}s") from e
    except aiohttp.ClientError as e:
        raise CollaboratorError(f"{service} API request failed: {e}") from e


def _error_detail(body: str) -> str:
    body = body.strip()
    return body[:200] if body else "no response body"
