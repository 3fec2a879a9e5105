from __future__ import annotations

from typing import Optional

from ..content import DEFAULT_OUTPUT_FORMAT, ContentResult, OutputFormat
from ..endpoints import UPSCALE_CONSERVATIVE, UPSCALE_CREATIVE, UPSCALE_CREATIVE_RESULT
from ..jobs import JobResult, JobSubmission
from ._base import ImageSource, Resource, compact


class UpscaleResource(Resource):
    """Accessed via ``client.v2beta.stable_image.upscale``.

    Conservative upscales answer immediately.  Creative upscales are jobs:
    :meth:`start_creative` returns a :class:`JobSubmission` whose id is then
    polled with :meth:`fetch_creative_result` until it yields a
    :class:`ContentResult`.
    """

    async def conservative(
        self,
        image: ImageSource,
        prompt: str,
        *,
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        creativity: Optional[float] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        data = compact(
            prompt=prompt,
            negative_prompt=negative_prompt,
            seed=seed,
            creativity=creativity,
            output_format=output_format,
        )
        return await self._generate(
            UPSCALE_CONSERVATIVE, data, {"image": image}, output_format, "Failed to perform conservative upscale"
        )

    async def start_creative(
        self,
        image: ImageSource,
        prompt: str,
        *,
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        creativity: Optional[float] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> JobSubmission:
        data = compact(
            prompt=prompt,
            negative_prompt=negative_prompt,
            seed=seed,
            creativity=creativity,
            output_format=output_format,
        )
        return await self._submit(
            UPSCALE_CREATIVE, data, {"image": image}, output_format, "Failed to start creative upscale"
        )

    async def fetch_creative_result(self, job_id: str, output_format: str) -> JobResult:
        """Fetch a creative upscale once.

        Args:
            job_id: ``id`` of the :class:`JobSubmission` from :meth:`start_creative`.
            output_format: The format requested at submission; the service
                does not echo it back.

        Returns:
            :class:`JobStatus` while the upscale is running, then a
            :class:`ContentResult`.
        """
        return await self._fetch_result(
            UPSCALE_CREATIVE_RESULT, job_id, output_format, "Failed to fetch creative upscale result"
        )
