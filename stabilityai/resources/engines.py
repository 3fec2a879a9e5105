from __future__ import annotations

from typing import Any

from .._http import response_payload
from ..endpoints import ENGINES_LIST
from ..exceptions import MalformedResponseError, classify_error
from ._base import Resource


class EnginesResource(Resource):
    """Accessed via ``client.v1.engines``."""

    async def list(self) -> list[dict[str, Any]]:
        """Return the engines available to the account.

        Each entry has ``id``, ``name``, ``description`` and ``type`` (one of
        ``AUDIO``, ``CLASSIFICATION``, ``PICTURE``, ``STORAGE``, ``TEXT``,
        ``VIDEO``).
        """
        response = await self._http.get(ENGINES_LIST)
        body = response_payload(response)
        if response.status_code != 200:
            raise classify_error(response.status_code, "Failed to get engines", body)
        if not isinstance(body, list):
            raise MalformedResponseError("Engine list response is not a list", status_code=200, payload=body)
        return body
