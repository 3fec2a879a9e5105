"""Internal HTTP client; not part of the public API."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import httpx

from ._files import ScratchStorage
from .config import Credentials, auth_headers
from .endpoints import Endpoint

logger = logging.getLogger("stabilityai")


def response_payload(response: httpx.Response) -> Any:
    """Best-effort structured body of *response*, for error reporting."""
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpClient:
    """Issues authenticated requests and hands back every response as-is.

    Statuses are never turned into exceptions here; callers inspect 2xx, 202
    and 4xx responses uniformly.
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._headers = auth_headers(credentials)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    def url(self, endpoint: Endpoint, *suffix: str) -> str:
        return f"{self._base_url}{endpoint.path(*suffix)}"

    async def get(self, endpoint: Endpoint, *suffix: str, accept: Optional[str] = "application/json") -> httpx.Response:
        return await self._request("GET", self.url(endpoint, *suffix), accept=accept)

    async def post_json(
        self,
        endpoint: Endpoint,
        body: dict[str, Any],
        *suffix: str,
        accept: Optional[str] = "application/json",
    ) -> httpx.Response:
        return await self._request("POST", self.url(endpoint, *suffix), accept=accept, json=body)

    async def post_form(
        self,
        endpoint: Endpoint,
        data: dict[str, Any],
        files: dict[str, tuple[str, Any]],
        *suffix: str,
        accept: Optional[str] = "application/json",
    ) -> httpx.Response:
        # httpx only switches to multipart when files are present; an empty
        # placeholder keeps prompt-only requests multipart as the API requires.
        if not files:
            files = {"none": ("", b"")}
        data = {key: _form_value(value) for key, value in data.items()}
        return await self._request(
            "POST", self.url(endpoint, *suffix), accept=accept, data=data, files=files
        )

    async def _request(self, method: str, url: str, accept: Optional[str] = None, **kwargs: Any) -> httpx.Response:
        headers = list(self._headers)
        if accept:
            headers.append(("Accept", accept))
        logger.debug("%s %s  fields=%s", method, url, sorted(kwargs.get("data") or kwargs.get("json") or {}))

        response = await self._client.request(method, url, headers=headers, **kwargs)

        logger.debug("← %s %s", response.status_code, url)
        return response

    async def download(self, url: str, scratch: ScratchStorage, dest: Path) -> None:
        """Stream *url* into *dest* without credentials, following redirects.

        A failed download leaves no partial file behind and re-raises the
        httpx error unchanged.
        """
        logger.debug("downloading %s -> %s", url, dest)
        try:
            async with self._client.stream("GET", url, follow_redirects=True) as response:
                response.raise_for_status()
                await scratch.write_stream(dest, response.aiter_bytes())
        except BaseException:
            await scratch.delete_file(dest)
            raise

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
