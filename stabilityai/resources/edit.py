from __future__ import annotations

from typing import Literal, Optional

from ..content import DEFAULT_OUTPUT_FORMAT, ContentResult, OutputFormat
from ..endpoints import (
    EDIT_ERASE,
    EDIT_INPAINT,
    EDIT_OUTPAINT,
    EDIT_REMOVE_BACKGROUND,
    EDIT_REPLACE_BACKGROUND_AND_RELIGHT,
    EDIT_SEARCH_AND_REPLACE,
)
from ..exceptions import InvalidInputError
from ..jobs import JobSubmission
from ._base import ImageSource, Resource, compact

LightSourceDirection = Literal["above", "below", "left", "right"]


class EditResource(Resource):
    """Accessed via ``client.v2beta.stable_image.edit``.

    Image arguments accept a local file path or a public ``http(s)`` URL.
    """

    async def erase(
        self,
        image: ImageSource,
        *,
        mask: Optional[ImageSource] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        """Remove the masked region; without *mask* the image's alpha channel is used."""
        data = compact(seed=seed, output_format=output_format)
        return await self._generate(
            EDIT_ERASE,
            data,
            {"image": image, "mask": mask},
            output_format,
            "Failed to run stable image erase",
        )

    async def inpaint(
        self,
        image: ImageSource,
        prompt: str,
        *,
        mask: Optional[ImageSource] = None,
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        data = compact(
            prompt=prompt,
            negative_prompt=negative_prompt,
            seed=seed,
            output_format=output_format,
        )
        return await self._generate(
            EDIT_INPAINT,
            data,
            {"image": image, "mask": mask},
            output_format,
            "Failed to run stable image inpaint",
        )

    async def outpaint(
        self,
        image: ImageSource,
        *,
        left: Optional[int] = None,
        right: Optional[int] = None,
        up: Optional[int] = None,
        down: Optional[int] = None,
        prompt: Optional[str] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        """Extend the image by the given number of pixels in each direction.

        Raises:
            InvalidInputError: if no direction is given.
        """
        directions = compact(left=left, right=right, up=up, down=down)
        if not any(directions.values()):
            raise InvalidInputError("Outpaint needs at least one of left, right, up or down.")
        data = {
            **directions,
            **compact(prompt=prompt, seed=seed, output_format=output_format),
        }
        return await self._generate(
            EDIT_OUTPAINT, data, {"image": image}, output_format, "Failed to run stable image outpaint"
        )

    async def search_and_replace(
        self,
        image: ImageSource,
        prompt: str,
        search_prompt: str,
        *,
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        data = compact(
            prompt=prompt,
            search_prompt=search_prompt,
            negative_prompt=negative_prompt,
            seed=seed,
            output_format=output_format,
        )
        return await self._generate(
            EDIT_SEARCH_AND_REPLACE,
            data,
            {"image": image},
            output_format,
            "Failed to run stable image search and replace",
        )

    async def remove_background(
        self,
        image: ImageSource,
        *,
        output_format: Literal["png", "webp"] = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        return await self._generate(
            EDIT_REMOVE_BACKGROUND,
            {"output_format": output_format},
            {"image": image},
            output_format,
            "Failed to run stable image remove background",
        )

    async def replace_background_and_relight(
        self,
        image: ImageSource,
        *,
        background_prompt: Optional[str] = None,
        background_reference: Optional[ImageSource] = None,
        foreground_prompt: Optional[str] = None,
        negative_prompt: Optional[str] = None,
        preserve_original_subject: Optional[float] = None,
        original_background_depth: Optional[float] = None,
        keep_original_background: Optional[bool] = None,
        light_source_direction: Optional[LightSourceDirection] = None,
        light_reference: Optional[ImageSource] = None,
        light_source_strength: Optional[float] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> JobSubmission:
        """Start replacing the background of *image* and relighting its subject.

        The generation runs asynchronously: poll the returned id with
        ``client.v2beta.stable_image.results.fetch(job.id, job.output_format)``.

        Raises:
            InvalidInputError: if neither *background_prompt* nor
                *background_reference* is given.
        """
        if background_prompt is None and background_reference is None:
            raise InvalidInputError(
                "Replace background needs a background_prompt or a background_reference."
            )
        data = compact(
            background_prompt=background_prompt,
            foreground_prompt=foreground_prompt,
            negative_prompt=negative_prompt,
            preserve_original_subject=preserve_original_subject,
            original_background_depth=original_background_depth,
            keep_original_background=keep_original_background,
            light_source_direction=light_source_direction,
            light_source_strength=light_source_strength,
            seed=seed,
            output_format=output_format,
        )
        images = {
            "subject_image": image,
            "background_reference": background_reference,
            "light_reference": light_reference,
        }
        return await self._submit(
            EDIT_REPLACE_BACKGROUND_AND_RELIGHT,
            data,
            images,
            output_format,
            "Failed to run stable image replace background and relight",
        )
