from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from ..content import DEFAULT_OUTPUT_FORMAT, ContentResult, OutputFormat
from ..endpoints import GENERATE_CORE, GENERATE_SD3, GENERATE_ULTRA, Endpoint
from ._base import ImageSource, Resource, compact

AspectRatio = Literal["16:9", "1:1", "21:9", "2:3", "3:2", "4:5", "5:4", "9:16", "9:21"]
SD3Model = Literal["sd3", "sd3-turbo"]


@dataclass(frozen=True)
class TextToImage:
    aspect_ratio: Optional[AspectRatio] = None


@dataclass(frozen=True)
class ImageToImage:
    image: ImageSource
    strength: float


SD3Mode = Union[TextToImage, ImageToImage]


class GenerateResource(Resource):
    """Accessed via ``client.v2beta.stable_image.generate``."""

    async def ultra(
        self,
        prompt: str,
        *,
        aspect_ratio: Optional[AspectRatio] = None,
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        return await self._text_to_image(
            GENERATE_ULTRA, prompt, aspect_ratio, negative_prompt, seed, output_format, "ultra"
        )

    async def core(
        self,
        prompt: str,
        *,
        aspect_ratio: Optional[AspectRatio] = None,
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        return await self._text_to_image(
            GENERATE_CORE, prompt, aspect_ratio, negative_prompt, seed, output_format, "core"
        )

    async def sd3(
        self,
        prompt: str,
        mode: SD3Mode = TextToImage(),
        *,
        model: SD3Model = "sd3",
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        output_format: Literal["jpeg", "png"] = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        """Generate with Stable Diffusion 3 from text alone or from an image.

        *negative_prompt* is ignored by ``sd3-turbo`` and is not sent for it.
        """
        data = compact(prompt=prompt, model=model, seed=seed, output_format=output_format)
        images: dict[str, Optional[ImageSource]] = {}
        if isinstance(mode, ImageToImage):
            data.update(mode="image-to-image", strength=mode.strength)
            images["image"] = mode.image
        else:
            data["mode"] = "text-to-image"
            data.update(compact(aspect_ratio=mode.aspect_ratio))
        if model != "sd3-turbo":
            data.update(compact(negative_prompt=negative_prompt))

        return await self._generate(
            GENERATE_SD3, data, images, output_format, "Failed to stable image generation sd3"
        )

    async def _text_to_image(
        self,
        endpoint: Endpoint,
        prompt: str,
        aspect_ratio: Optional[str],
        negative_prompt: Optional[str],
        seed: Optional[int],
        output_format: str,
        label: str,
    ) -> ContentResult:
        data = compact(
            prompt=prompt,
            aspect_ratio=aspect_ratio,
            negative_prompt=negative_prompt,
            seed=seed,
            output_format=output_format,
        )
        return await self._generate(
            endpoint, data, {}, output_format, f"Failed to stable image generation {label}"
        )
