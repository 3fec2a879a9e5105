from __future__ import annotations

from typing import Any, Mapping

from .._http import response_payload
from ..endpoints import USER_ACCOUNT, USER_BALANCE
from ..exceptions import MalformedResponseError, classify_error
from ._base import Resource


class UserResource(Resource):
    """Accessed via ``client.v1.user``."""

    async def account(self) -> dict[str, Any]:
        """Return the account the API key belongs to.

        Returns:
            dict with ``id``, ``email``, ``profile_picture`` and
            ``organizations`` as reported by the API.
        """
        response = await self._http.get(USER_ACCOUNT)
        body = response_payload(response)
        if response.status_code != 200:
            raise classify_error(response.status_code, "Failed to get user account", body)
        if not isinstance(body, Mapping):
            raise MalformedResponseError("Account response is not an object", status_code=200, payload=body)
        return dict(body)

    async def balance(self) -> float:
        """Return the remaining credit balance."""
        response = await self._http.get(USER_BALANCE)
        body = response_payload(response)
        if response.status_code != 200:
            raise classify_error(response.status_code, "Failed to get user token balance", body)
        credits = body.get("credits") if isinstance(body, dict) else None
        if not isinstance(credits, (int, float)):
            raise MalformedResponseError("Balance response has no credits", status_code=200, payload=body)
        return float(credits)
