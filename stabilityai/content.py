"""Decoding of generated media into local files."""
from __future__ import annotations

import base64
import binascii
import enum
import logging
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

from ._files import ScratchStorage
from .exceptions import MalformedResponseError

logger = logging.getLogger("stabilityai")

OutputFormat = Literal["jpeg", "png", "webp"]
DEFAULT_OUTPUT_FORMAT: OutputFormat = "png"
VIDEO_OUTPUT_FORMAT = "mp4"
THREE_D_OUTPUT_FORMAT = "glb"

FINISH_SUCCESS = "SUCCESS"
FINISH_CONTENT_FILTERED = "CONTENT_FILTERED"


class ContentType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"
    THREE_D = "3d"


# Fields tried in order after the one named by the content type; v1 artifacts
# carry their media under "base64".
_FALLBACK_MEDIA_FIELDS = ("base64", "data")


@dataclass(frozen=True)
class ContentResult:
    """A generated file persisted in scratch storage."""

    filepath: str
    filename: str
    content_type: ContentType
    output_format: str
    content_filtered: bool = False
    errored: bool = False
    seed: Optional[int] = None


def media_fields(content_type: ContentType) -> tuple[str, ...]:
    return (content_type.value, *_FALLBACK_MEDIA_FIELDS)


def has_media(body: Any, content_type: ContentType) -> bool:
    return _find_media(body, content_type) is not None


def _find_media(body: Any, content_type: ContentType) -> Optional[str]:
    if not isinstance(body, Mapping):
        return None
    for field in media_fields(content_type):
        value = body.get(field)
        if isinstance(value, str) and value:
            return value
    return None


def _finish_flags(body: Mapping[str, Any]) -> tuple[bool, bool]:
    reason = body.get("finish_reason", body.get("finishReason"))
    if reason is None or reason == FINISH_SUCCESS:
        return False, False
    if reason == FINISH_CONTENT_FILTERED:
        return True, False
    return False, True


async def decode_content(
    body: Any,
    output_format: str,
    resource_tag: str,
    scratch: ScratchStorage,
    content_type: ContentType = ContentType.IMAGE,
) -> ContentResult:
    """Write the base64 media embedded in a JSON *body* to scratch storage.

    Raises:
        MalformedResponseError: if no media field is present or it is not
            valid base64.
    """
    encoded = _find_media(body, content_type)
    if encoded is None:
        raise MalformedResponseError(
            f"Response has no {content_type.value} content in any of {list(media_fields(content_type))}",
            status_code=200,
            payload=body if isinstance(body, Mapping) else None,
        )
    try:
        content = base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise MalformedResponseError(
            f"Response {content_type.value} content is not valid base64: {exc}", status_code=200
        ) from exc

    content_filtered, errored = _finish_flags(body)
    seed = body.get("seed")

    path = scratch.unique_path(resource_tag, output_format)
    await scratch.write_file(path, content)
    logger.debug(
        "wrote %s (%d bytes) filtered=%s errored=%s", path, len(content), content_filtered, errored
    )
    return ContentResult(
        filepath=str(path),
        filename=path.name,
        content_type=content_type,
        output_format=output_format,
        content_filtered=content_filtered,
        errored=errored,
        seed=seed if isinstance(seed, int) else None,
    )


async def decode_binary(
    content: bytes,
    resource_tag: str,
    scratch: ScratchStorage,
    output_format: str = THREE_D_OUTPUT_FORMAT,
) -> ContentResult:
    """Write a raw binary 3D model to scratch storage.

    The 3D endpoints report no moderation state, so the result is never
    marked as filtered.
    """
    path = scratch.unique_path(resource_tag, output_format)
    await scratch.write_file(path, content)
    logger.debug("wrote %s (%d bytes)", path, len(content))
    return ContentResult(
        filepath=str(path),
        filename=path.name,
        content_type=ContentType.THREE_D,
        output_format=output_format,
    )
