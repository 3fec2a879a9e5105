from __future__ import annotations

from ..content import DEFAULT_OUTPUT_FORMAT
from ..endpoints import ASYNC_RESULT
from ..jobs import JobResult
from ._base import Resource


class ResultsResource(Resource):
    """Accessed via ``client.v2beta.stable_image.results``."""

    async def fetch(self, job_id: str, output_format: str = DEFAULT_OUTPUT_FORMAT) -> JobResult:
        """Fetch the result of any asynchronous stable-image generation.

        Results are kept by the service for 24 hours after generation.
        """
        return await self._fetch_result(
            ASYNC_RESULT, job_id, output_format, "Failed to fetch generation result"
        )
