from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

API_KEY_ENV = "STABILITY_AI_API_KEY"
DEFAULT_BASE_URL = "https://api.stability.ai"


@dataclass(frozen=True)
class Credentials:
    """Identification sent with every request.

    Only ``api_key`` is required; the remaining fields are forwarded as
    headers when set.
    """

    api_key: str
    organization: Optional[str] = None
    client_id: Optional[str] = None
    client_version: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        client_id: Optional[str] = None,
        client_version: Optional[str] = None,
    ) -> "Credentials":
        """Build credentials, reading the key from ``STABILITY_AI_API_KEY`` when omitted.

        Raises:
            ValueError: if no API key is given or found in the environment.
        """
        api_key = api_key or os.environ.get(API_KEY_ENV)
        if not api_key:
            raise ValueError(f"No API key given and {API_KEY_ENV} is not set.")
        return cls(
            api_key=api_key,
            organization=organization,
            client_id=client_id,
            client_version=client_version,
        )


def auth_headers(credentials: Credentials) -> list[tuple[str, str]]:
    headers = [("Authorization", f"Bearer {credentials.api_key}")]
    if credentials.organization:
        headers.append(("Organization", credentials.organization))
    if credentials.client_id:
        headers.append(("Stability-Client-ID", credentials.client_id))
    if credentials.client_version:
        headers.append(("Stability-Client-Version", credentials.client_version))
    return headers
