from __future__ import annotations

import logging
import os
from typing import Any, Optional, Union

import httpx

from ._files import ScratchStorage
from ._http import HttpClient
from .config import DEFAULT_BASE_URL, Credentials
from .resources import V1, V2Beta

logger = logging.getLogger("stabilityai")


class StabilityAI:
    """Top-level Stability AI API client.

    Create a single instance and reuse it across your application.  The
    client manages an underlying HTTP connection pool; always close it when
    you are done, either by awaiting :meth:`aclose` explicitly or by using
    the client as an async context manager::

        # Context manager (recommended)
        async with StabilityAI(api_key="sk-...") as client:
            result = await client.v2beta.stable_image.generate.core("a lighthouse")
            ...

        # Manual close
        client = StabilityAI(api_key="sk-...")
        try:
            result = await client.v2beta.stable_image.generate.core("a lighthouse")
            ...
        finally:
            await client.aclose()

    Every call is independent: many may run concurrently on one client.
    """

    v1: V1
    """Account, engine listing and v1 generation endpoints."""

    v2beta: V2Beta
    """Stable Image, Stable Video and Stable 3D endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        client_id: Optional[str] = None,
        client_version: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        scratch_dir: Optional[Union[str, os.PathLike]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        debug: bool = False,
    ):
        """
        Args:
            api_key: Your Stability AI API key.  Read from the
                ``STABILITY_AI_API_KEY`` environment variable when omitted.
            organization: Organization id sent as the ``Organization``
                header.
            client_id: Name of your application, sent as
                ``Stability-Client-ID``.
            client_version: Version of your application, sent as
                ``Stability-Client-Version``.
            base_url: Override the API base URL.
                Defaults to ``https://api.stability.ai``.
            timeout: HTTP timeout in seconds applied to every request.  No
                timeout by default; generation requests can be slow.
            scratch_dir: Directory for downloaded inputs and generated
                outputs.  Defaults to the system temp directory.
            transport: Custom httpx transport, e.g. for testing.
            debug: Set to ``True`` to enable verbose request/response
                logging via the ``stabilityai`` logger.

        Raises:
            ValueError: if no API key is given or found in the environment.
        """
        if debug:
            logging.getLogger("stabilityai").setLevel(logging.DEBUG)
            if not logging.getLogger("stabilityai").handlers:
                logging.getLogger("stabilityai").addHandler(logging.StreamHandler())

        credentials = Credentials.from_env(api_key, organization, client_id, client_version)
        self.scratch = ScratchStorage(scratch_dir)
        self._http = HttpClient(credentials, base_url=base_url, timeout=timeout, transport=transport)
        self.v1 = V1(self._http, self.scratch)
        self.v2beta = V2Beta(self._http, self.scratch)

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> "StabilityAI":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()
