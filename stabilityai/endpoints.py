"""Static table of the REST endpoints the client talks to.

Each API generation lives under its own version path segment and resource
path; nothing here carries behaviour beyond building paths and the tag used
to name output files.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass


class APIVersion(str, enum.Enum):
    V1 = "v1"
    V2_BETA = "v2beta"


@dataclass(frozen=True)
class Endpoint:
    version: APIVersion
    resource: str
    name: str = ""

    def path(self, *suffix: str) -> str:
        parts = [self.version.value, self.resource, self.name, *suffix]
        return "/" + "/".join(part.strip("/") for part in parts if part)

    @property
    def tag(self) -> str:
        parts = [self.version.value, self.resource, self.name]
        joined = "_".join(part for part in parts if part)
        return joined.replace("/", "_").replace("-", "_")


# v1
USER_ACCOUNT = Endpoint(APIVersion.V1, "user", "account")
USER_BALANCE = Endpoint(APIVersion.V1, "user", "balance")
ENGINES_LIST = Endpoint(APIVersion.V1, "engines", "list")


def v1_generation(engine_id: str, name: str) -> Endpoint:
    return Endpoint(APIVersion.V1, "generation", f"{engine_id}/{name}")


V1_TEXT_TO_IMAGE = "text-to-image"
V1_IMAGE_TO_IMAGE = "image-to-image"
V1_IMAGE_TO_IMAGE_UPSCALE = "image-to-image/upscale"
V1_IMAGE_TO_IMAGE_MASKING = "image-to-image/masking"

# v2beta stable-image
GENERATE_ULTRA = Endpoint(APIVersion.V2_BETA, "stable-image/generate", "ultra")
GENERATE_CORE = Endpoint(APIVersion.V2_BETA, "stable-image/generate", "core")
GENERATE_SD3 = Endpoint(APIVersion.V2_BETA, "stable-image/generate", "sd3")

EDIT_ERASE = Endpoint(APIVersion.V2_BETA, "stable-image/edit", "erase")
EDIT_INPAINT = Endpoint(APIVersion.V2_BETA, "stable-image/edit", "inpaint")
EDIT_OUTPAINT = Endpoint(APIVersion.V2_BETA, "stable-image/edit", "outpaint")
EDIT_SEARCH_AND_REPLACE = Endpoint(APIVersion.V2_BETA, "stable-image/edit", "search-and-replace")
EDIT_REMOVE_BACKGROUND = Endpoint(APIVersion.V2_BETA, "stable-image/edit", "remove-background")
EDIT_REPLACE_BACKGROUND_AND_RELIGHT = Endpoint(
    APIVersion.V2_BETA, "stable-image/edit", "replace-background-and-relight"
)

CONTROL_SKETCH = Endpoint(APIVersion.V2_BETA, "stable-image/control", "sketch")
CONTROL_STRUCTURE = Endpoint(APIVersion.V2_BETA, "stable-image/control", "structure")
CONTROL_STYLE = Endpoint(APIVersion.V2_BETA, "stable-image/control", "style")

UPSCALE_CONSERVATIVE = Endpoint(APIVersion.V2_BETA, "stable-image/upscale", "conservative")
UPSCALE_CREATIVE = Endpoint(APIVersion.V2_BETA, "stable-image/upscale", "creative")
UPSCALE_CREATIVE_RESULT = Endpoint(APIVersion.V2_BETA, "stable-image/upscale", "creative/result")

ASYNC_RESULT = Endpoint(APIVersion.V2_BETA, "results")

# v2beta video / 3d
IMAGE_TO_VIDEO = Endpoint(APIVersion.V2_BETA, "image-to-video")
IMAGE_TO_VIDEO_RESULT = Endpoint(APIVersion.V2_BETA, "image-to-video", "result")
STABLE_FAST_3D = Endpoint(APIVersion.V2_BETA, "3d", "stable-fast-3d")
