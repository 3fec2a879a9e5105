from __future__ import annotations

from typing import Optional

from .._http import response_payload
from ..content import ContentResult, decode_binary
from ..endpoints import STABLE_FAST_3D
from ..exceptions import classify_error
from ._base import ImageSource, Resource, compact


class Stable3DResource(Resource):
    """Accessed via ``client.v2beta.stable_3d``."""

    async def stable_fast_3d(
        self,
        image: ImageSource,
        *,
        texture_resolution: Optional[int] = None,
        foreground_ratio: Optional[float] = None,
    ) -> ContentResult:
        """Reconstruct a textured 3D model from a single image.

        The service answers with the binary ``.glb`` model itself rather than
        JSON.
        """
        data = compact(texture_resolution=texture_resolution, foreground_ratio=foreground_ratio)
        response = await self._post_form(STABLE_FAST_3D, data, {"image": image}, accept=None)
        if response.status_code != 200:
            raise classify_error(response.status_code, "Failed: 3D Stable Fast 3D", response_payload(response))
        return await decode_binary(response.content, STABLE_FAST_3D.tag, self._scratch)
