"""Stability AI Python SDK
========================

An async client for the Stability AI REST API: image generation, editing,
upscaling, image-to-video and image-to-3D.  Every call returns files that are
already on disk, so results can be used directly without handling base64 or
binary payloads.

Quick start::

    import asyncio

    from stabilityai import ContentResult, StabilityAI, DEFAULT_POLL_INTERVAL

    async def main():
        async with StabilityAI(api_key="sk-...") as client:

            # Synchronous endpoints return the file straight away
            image = await client.v2beta.stable_image.generate.core("a lighthouse at dusk")
            print(image.filepath, image.seed)

            # Asynchronous endpoints return a job id to poll
            job = await client.v2beta.stable_video.image_to_video(image.filepath)
            while True:
                result = await client.v2beta.stable_video.image_to_video_result(job.id)
                if isinstance(result, ContentResult):
                    break
                await asyncio.sleep(DEFAULT_POLL_INTERVAL)
            print(result.filepath)

    asyncio.run(main())

Main classes
------------

:class:`StabilityAI`
    The top-level API client.  Can be used as an async context manager
    (``async with StabilityAI(...) as client``).

:class:`ImageReference`
    Any image argument may be a local path or a public ``http(s)`` URL.
    Remote images are downloaded into scratch storage for the duration of
    one call and deleted afterwards; local files are never modified.

:class:`ContentResult`
    A generated file in scratch storage, with the seed used and the
    ``content_filtered`` / ``errored`` flags reported by the service.

:class:`JobSubmission`, :class:`JobStatus`
    The id returned by an asynchronous endpoint, and the in-progress answer
    of its result endpoint.  Polling cadence and deadline are up to the
    caller; :data:`DEFAULT_POLL_INTERVAL` is a sensible delay.

Exceptions
----------

All SDK exceptions inherit from :class:`StabilityAIError` and carry a
``kind`` (:class:`ErrorKind`), the HTTP ``status_code`` and the raw
``payload`` returned by the service.

:class:`InvalidRequestError`, :class:`UnauthorizedError`,
:class:`ContentModerationError`, :class:`RecordNotFoundError`,
:class:`UnknownError`
    HTTP-level errors (400, 401, 403, 404, anything else).

:class:`MalformedResponseError`
    A success response that did not contain the expected content.

:class:`InvalidInputError`
    An argument that cannot be sent, e.g. an image that is neither a URL
    nor an existing file.

Network failures are raised by httpx unchanged.
"""

from .client import StabilityAI
from .config import Credentials, auth_headers
from .content import ContentResult, ContentType, decode_binary, decode_content
from .exceptions import (
    ContentModerationError,
    ErrorKind,
    InvalidInputError,
    InvalidRequestError,
    MalformedResponseError,
    RecordNotFoundError,
    StabilityAIError,
    UnauthorizedError,
    UnknownError,
    classify_error,
)
from .image_reference import ImageReference, Origin
from .jobs import (
    DEFAULT_POLL_INTERVAL,
    JobStatus,
    JobSubmission,
    interpret_result,
    parse_submission,
)
from .resources import (
    EsrganUpscale,
    ImageStrength,
    ImageToImage,
    InitImageAlpha,
    LatentUpscale,
    MaskImage,
    StepSchedule,
    TextPrompt,
    TextToImage,
)

__version__ = "0.1.0"
__all__ = [
    "StabilityAI",
    "Credentials",
    "auth_headers",
    "ImageReference",
    "Origin",
    "ContentResult",
    "ContentType",
    "decode_content",
    "decode_binary",
    "JobStatus",
    "JobSubmission",
    "interpret_result",
    "parse_submission",
    "DEFAULT_POLL_INTERVAL",
    "EsrganUpscale",
    "ImageStrength",
    "ImageToImage",
    "InitImageAlpha",
    "LatentUpscale",
    "MaskImage",
    "StepSchedule",
    "TextPrompt",
    "TextToImage",
    "StabilityAIError",
    "ErrorKind",
    "classify_error",
    "InvalidRequestError",
    "UnauthorizedError",
    "ContentModerationError",
    "RecordNotFoundError",
    "UnknownError",
    "MalformedResponseError",
    "InvalidInputError",
]
