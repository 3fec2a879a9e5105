from __future__ import annotations

from typing import TYPE_CHECKING

from .control import ControlResource
from .edit import EditResource
from .engines import EnginesResource
from .generate import GenerateResource, ImageToImage, TextToImage
from .generation import (
    EsrganUpscale,
    GenerationResource,
    ImageStrength,
    InitImageAlpha,
    LatentUpscale,
    MaskImage,
    StepSchedule,
    TextPrompt,
)
from .results import ResultsResource
from .three_d import Stable3DResource
from .upscale import UpscaleResource
from .user import UserResource
from .video import VideoResource

if TYPE_CHECKING:
    from .._files import ScratchStorage
    from .._http import HttpClient


class V1:
    """Accessed via ``client.v1``."""

    def __init__(self, http: "HttpClient", scratch: "ScratchStorage"):
        self.user = UserResource(http, scratch)
        self.engines = EnginesResource(http, scratch)
        self.generation = GenerationResource(http, scratch)


class StableImage:
    """Accessed via ``client.v2beta.stable_image``."""

    def __init__(self, http: "HttpClient", scratch: "ScratchStorage"):
        self.generate = GenerateResource(http, scratch)
        self.edit = EditResource(http, scratch)
        self.control = ControlResource(http, scratch)
        self.upscale = UpscaleResource(http, scratch)
        self.results = ResultsResource(http, scratch)


class V2Beta:
    """Accessed via ``client.v2beta``."""

    def __init__(self, http: "HttpClient", scratch: "ScratchStorage"):
        self.stable_image = StableImage(http, scratch)
        self.stable_video = VideoResource(http, scratch)
        self.stable_3d = Stable3DResource(http, scratch)


__all__ = [
    "V1",
    "V2Beta",
    "StableImage",
    "ControlResource",
    "EditResource",
    "EnginesResource",
    "GenerateResource",
    "GenerationResource",
    "ResultsResource",
    "Stable3DResource",
    "UpscaleResource",
    "UserResource",
    "VideoResource",
    "EsrganUpscale",
    "ImageStrength",
    "ImageToImage",
    "InitImageAlpha",
    "LatentUpscale",
    "MaskImage",
    "StepSchedule",
    "TextPrompt",
    "TextToImage",
]
