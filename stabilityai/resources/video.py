from __future__ import annotations

from typing import Optional

from ..content import VIDEO_OUTPUT_FORMAT, ContentType
from ..endpoints import IMAGE_TO_VIDEO, IMAGE_TO_VIDEO_RESULT
from ..jobs import JobResult, JobSubmission
from ._base import ImageSource, Resource, compact


class VideoResource(Resource):
    """Accessed via ``client.v2beta.stable_video``."""

    async def image_to_video(
        self,
        image: ImageSource,
        cfg_scale: float = 1.8,
        motion_bucket_id: int = 127,
        *,
        seed: Optional[int] = None,
    ) -> JobSubmission:
        """Start animating *image* into a short mp4 clip.

        Args:
            image: Local path or public URL of the first frame.
            cfg_scale: How strongly the video sticks to the image (0–10).
            motion_bucket_id: Amount of motion (1–255).
            seed: Generation seed.
        """
        data = {
            "cfg_scale": cfg_scale,
            "motion_bucket_id": motion_bucket_id,
            **compact(seed=seed),
        }
        return await self._submit(
            IMAGE_TO_VIDEO,
            data,
            {"image": image},
            VIDEO_OUTPUT_FORMAT,
            "Failed to start stable video image to video",
            ContentType.VIDEO,
        )

    async def image_to_video_result(self, job_id: str) -> JobResult:
        return await self._fetch_result(
            IMAGE_TO_VIDEO_RESULT,
            job_id,
            VIDEO_OUTPUT_FORMAT,
            "Failed to fetch stable video image to video result",
            ContentType.VIDEO,
        )
