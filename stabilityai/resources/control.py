from __future__ import annotations

from typing import Optional

from ..content import DEFAULT_OUTPUT_FORMAT, ContentResult, OutputFormat
from ..endpoints import CONTROL_SKETCH, CONTROL_STRUCTURE, CONTROL_STYLE, Endpoint
from ._base import ImageSource, Resource, compact
from .generate import AspectRatio


class ControlResource(Resource):
    """Accessed via ``client.v2beta.stable_image.control``."""

    async def sketch(
        self,
        image: ImageSource,
        prompt: str,
        *,
        control_strength: Optional[float] = None,
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        """Turn a rough sketch into a finished image guided by *prompt*."""
        return await self._control(
            CONTROL_SKETCH, image, prompt, control_strength, negative_prompt, seed, output_format
        )

    async def structure(
        self,
        image: ImageSource,
        prompt: str,
        *,
        control_strength: Optional[float] = None,
        negative_prompt: Optional[str] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        """Generate a new image that keeps the structure of *image*."""
        return await self._control(
            CONTROL_STRUCTURE, image, prompt, control_strength, negative_prompt, seed, output_format
        )

    async def style(
        self,
        image: ImageSource,
        prompt: str,
        *,
        negative_prompt: Optional[str] = None,
        aspect_ratio: Optional[AspectRatio] = None,
        fidelity: Optional[float] = None,
        seed: Optional[int] = None,
        output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT,
    ) -> ContentResult:
        """Generate an image for *prompt* in the style of *image*."""
        data = compact(
            prompt=prompt,
            negative_prompt=negative_prompt,
            aspect_ratio=aspect_ratio,
            fidelity=fidelity,
            seed=seed,
            output_format=output_format,
        )
        return await self._generate(
            CONTROL_STYLE, data, {"image": image}, output_format, "Failed to run stable image control style"
        )

    async def _control(
        self,
        endpoint: Endpoint,
        image: ImageSource,
        prompt: str,
        control_strength: Optional[float],
        negative_prompt: Optional[str],
        seed: Optional[int],
        output_format: str,
    ) -> ContentResult:
        data = compact(
            prompt=prompt,
            control_strength=control_strength,
            negative_prompt=negative_prompt,
            seed=seed,
            output_format=output_format,
        )
        return await self._generate(
            endpoint,
            data,
            {"image": image},
            output_format,
            f"Failed to run stable image control {endpoint.name}",
        )
