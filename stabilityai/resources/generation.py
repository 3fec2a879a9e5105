"""v1 generation endpoints.

These reply with an ``artifacts`` list, one entry per sample, each carrying
its own base64 image, seed and finish reason.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

import httpx

from .._http import response_payload
from ..content import ContentResult, decode_content
from ..endpoints import (
    V1_IMAGE_TO_IMAGE,
    V1_IMAGE_TO_IMAGE_MASKING,
    V1_IMAGE_TO_IMAGE_UPSCALE,
    V1_TEXT_TO_IMAGE,
    Endpoint,
    v1_generation,
)
from ..exceptions import MalformedResponseError, classify_error
from ._base import ImageSource, Resource, compact

V1_OUTPUT_FORMAT = "png"
ESRGAN_ENGINE = "esrgan-v1-x2plus"
LATENT_UPSCALER_ENGINE = "stable-diffusion-x4-latent-upscaler"


@dataclass(frozen=True)
class TextPrompt:
    text: str
    weight: float = 1.0


@dataclass(frozen=True)
class ImageStrength:
    """Blend the init image in by a fixed strength (0–1)."""

    image_strength: Optional[float] = None


@dataclass(frozen=True)
class StepSchedule:
    """Blend the init image in over a range of the diffusion schedule."""

    start: Optional[float] = None
    end: Optional[float] = None


InitImageMode = Union[ImageStrength, StepSchedule]


@dataclass(frozen=True)
class EsrganUpscale:
    pass


@dataclass(frozen=True)
class LatentUpscale:
    text_prompts: Sequence[TextPrompt] = ()
    seed: Optional[int] = None
    steps: Optional[int] = None
    cfg_scale: Optional[float] = None


UpscaleVariant = Union[EsrganUpscale, LatentUpscale]


@dataclass(frozen=True)
class MaskImage:
    """Mask supplied as a separate image; white (or, with ``black=True``, black) pixels are repainted."""

    mask: ImageSource
    black: bool = False


@dataclass(frozen=True)
class InitImageAlpha:
    """Repaint the transparent pixels of the init image itself."""


MaskVariant = Union[MaskImage, InitImageAlpha]


def _prompt_fields(text_prompts: Sequence[TextPrompt]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for i, prompt in enumerate(text_prompts):
        fields[f"text_prompts[{i}][text]"] = prompt.text
        fields[f"text_prompts[{i}][weight]"] = prompt.weight
    return fields


def _mode_fields(mode: InitImageMode) -> dict[str, Any]:
    if isinstance(mode, StepSchedule):
        return compact(
            init_image_mode="STEP_SCHEDULE",
            step_schedule_start=mode.start,
            step_schedule_end=mode.end,
        )
    return compact(init_image_mode="IMAGE_STRENGTH", image_strength=mode.image_strength)


class GenerationResource(Resource):
    """Accessed via ``client.v1.generation``.

    Every method returns one :class:`ContentResult` per generated sample.
    """

    async def text_to_image(
        self,
        engine_id: str,
        text_prompts: Sequence[TextPrompt],
        *,
        height: Optional[int] = None,
        width: Optional[int] = None,
        cfg_scale: Optional[float] = None,
        clip_guidance_preset: Optional[str] = None,
        sampler: Optional[str] = None,
        samples: Optional[int] = None,
        seed: Optional[int] = None,
        steps: Optional[int] = None,
        style_preset: Optional[str] = None,
        extras: Optional[dict[str, Any]] = None,
    ) -> list[ContentResult]:
        endpoint = v1_generation(engine_id, V1_TEXT_TO_IMAGE)
        body = compact(
            text_prompts=[{"text": p.text, "weight": p.weight} for p in text_prompts],
            height=height,
            width=width,
            cfg_scale=cfg_scale,
            clip_guidance_preset=clip_guidance_preset,
            sampler=sampler,
            samples=samples,
            seed=seed,
            steps=steps,
            style_preset=style_preset,
            extras=extras,
        )
        response = await self._http.post_json(endpoint, body)
        return await self._artifacts(response, endpoint, "Failed to run text to image")

    async def image_to_image(
        self,
        engine_id: str,
        text_prompts: Sequence[TextPrompt],
        init_image: ImageSource,
        mode: InitImageMode = ImageStrength(),
        *,
        cfg_scale: Optional[float] = None,
        clip_guidance_preset: Optional[str] = None,
        sampler: Optional[str] = None,
        samples: Optional[int] = None,
        seed: Optional[int] = None,
        steps: Optional[int] = None,
        style_preset: Optional[str] = None,
    ) -> list[ContentResult]:
        endpoint = v1_generation(engine_id, V1_IMAGE_TO_IMAGE)
        data = {
            **_prompt_fields(text_prompts),
            **_mode_fields(mode),
            **compact(
                cfg_scale=cfg_scale,
                clip_guidance_preset=clip_guidance_preset,
                sampler=sampler,
                samples=samples,
                seed=seed,
                steps=steps,
                style_preset=style_preset,
            ),
        }
        response = await self._post_form(endpoint, data, {"init_image": init_image})
        return await self._artifacts(response, endpoint, "Failed to run image to image")

    async def image_to_image_upscale(
        self,
        image: ImageSource,
        variant: UpscaleVariant = EsrganUpscale(),
        *,
        height: Optional[int] = None,
        width: Optional[int] = None,
    ) -> list[ContentResult]:
        """Upscale with ESRGAN (2x) or the latent upscaler (4x).

        Only one of *height* and *width* may be given; the other follows the
        aspect ratio.
        """
        data = compact(height=height, width=width)
        if isinstance(variant, LatentUpscale):
            engine_id = LATENT_UPSCALER_ENGINE
            data.update(_prompt_fields(variant.text_prompts))
            data.update(compact(seed=variant.seed, steps=variant.steps, cfg_scale=variant.cfg_scale))
        else:
            engine_id = ESRGAN_ENGINE
        endpoint = v1_generation(engine_id, V1_IMAGE_TO_IMAGE_UPSCALE)
        response = await self._post_form(endpoint, data, {"image": image})
        return await self._artifacts(response, endpoint, "Failed to run image to image upscale")

    async def image_to_image_masking(
        self,
        engine_id: str,
        text_prompts: Sequence[TextPrompt],
        init_image: ImageSource,
        mask: MaskVariant,
        *,
        cfg_scale: Optional[float] = None,
        clip_guidance_preset: Optional[str] = None,
        sampler: Optional[str] = None,
        samples: Optional[int] = None,
        seed: Optional[int] = None,
        steps: Optional[int] = None,
        style_preset: Optional[str] = None,
    ) -> list[ContentResult]:
        endpoint = v1_generation(engine_id, V1_IMAGE_TO_IMAGE_MASKING)
        images: dict[str, Optional[ImageSource]] = {"init_image": init_image}
        if isinstance(mask, MaskImage):
            mask_source = "MASK_IMAGE_BLACK" if mask.black else "MASK_IMAGE_WHITE"
            images["mask_image"] = mask.mask
        else:
            mask_source = "INIT_IMAGE_ALPHA"
        data = {
            **_prompt_fields(text_prompts),
            "mask_source": mask_source,
            **compact(
                cfg_scale=cfg_scale,
                clip_guidance_preset=clip_guidance_preset,
                sampler=sampler,
                samples=samples,
                seed=seed,
                steps=steps,
                style_preset=style_preset,
            ),
        }
        response = await self._post_form(endpoint, data, images)
        return await self._artifacts(response, endpoint, "Failed to run image to image masking")

    async def _artifacts(self, response: httpx.Response, endpoint: Endpoint, message: str) -> list[ContentResult]:
        body = response_payload(response)
        if response.status_code != 200:
            raise classify_error(response.status_code, message, body)
        artifacts = body.get("artifacts") if isinstance(body, dict) else None
        if not isinstance(artifacts, list):
            raise MalformedResponseError(f"{message}: no artifacts in response", status_code=200, payload=body)
        results: list[ContentResult] = []
        try:
            for artifact in artifacts:
                results.append(await decode_content(artifact, V1_OUTPUT_FORMAT, endpoint.tag, self._scratch))
        except BaseException:
            # All samples or none: drop the files written before the failure.
            for result in results:
                await self._scratch.delete_file(result.filepath)
            raise
        return results
