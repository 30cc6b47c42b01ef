"""HTTP helpers mapping transport and status failures onto the error taxonomy."""

from typing import Any

import httpx

from ambos.errors import UpstreamError, raise_for_status

HTTP_TIMEOUT = 30.0


async def http_get(
    provider: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """GET ``url`` and raise the matching error for a failed request."""
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            response = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as e:
        raise UpstreamError(provider, f"request failed: {e}") from e
    raise_for_status(provider, response.status_code, response.text)
    return response


async def http_post(
    provider: str,
    url: str,
    *,
    json: Any = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """POST ``json`` to ``url`` and raise the matching error for a failed request."""
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            response = await client.post(url, json=json, headers=headers)
    except httpx.HTTPError as e:
        raise UpstreamError(provider, f"request failed: {e}") from e
    raise_for_status(provider, response.status_code, response.text)
    return response


def read_json(provider: str, response: httpx.Response) -> Any:
    """Decode a JSON body, treating malformed JSON as an upstream failure."""
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamError(
            provider, "malformed JSON body", status_code=response.status_code
        ) from e
