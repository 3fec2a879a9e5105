"""Submit-then-poll protocol for asynchronous generations.

Some endpoints (creative upscale, image-to-video, replace-background-and-relight)
do not return content directly.  Submission replies ``200 {"id": ...}`` and
the result must then be fetched repeatedly by id until it is ready::

    job = await client.v2beta.stable_video.image_to_video("cat.png")
    while True:
        result = await client.v2beta.stable_video.image_to_video_result(job.id)
        if isinstance(result, ContentResult):
            break
        await asyncio.sleep(DEFAULT_POLL_INTERVAL)

The library never sleeps, retries or gives up on its own: every fetch is a
single request and the caller owns cadence and the overall deadline.  Results
are retained by the service for 24 hours.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Mapping, Union

import httpx

from ._files import ScratchStorage
from ._http import response_payload
from .content import ContentResult, ContentType, decode_content, has_media
from .exceptions import MalformedResponseError, classify_error

logger = logging.getLogger("stabilityai")

IN_PROGRESS = "in-progress"

# Recommended delay between result fetches, in seconds.  Not enforced.
DEFAULT_POLL_INTERVAL = 2.5


@dataclass(frozen=True)
class JobStatus:
    """A job the service is still working on."""

    id: str
    status: Literal["in-progress"] = IN_PROGRESS


@dataclass(frozen=True)
class JobSubmission:
    """Acknowledgement of a submitted job.

    ``output_format`` echoes what was requested: the result endpoints do not
    remember it, so it must be passed back when fetching.
    """

    id: str
    output_format: str


JobResult = Union[ContentResult, JobStatus]


def parse_submission(
    response: httpx.Response,
    output_format: str,
    message: str,
    content_type: ContentType = ContentType.IMAGE,
) -> JobSubmission:
    """Interpret the reply to a job submission.

    Raises:
        MalformedResponseError: on a 200 reply that is not shaped ``{"id": str}``
            or that already carries content.
        StabilityAIError: subclass matching the status for any other reply.
    """
    if response.status_code != 200:
        raise classify_error(response.status_code, message, response_payload(response))

    body = response_payload(response)
    if (
        not isinstance(body, Mapping)
        or not isinstance(body.get("id"), str)
        or has_media(body, content_type)
    ):
        raise MalformedResponseError(f"{message}: expected a job id", status_code=200, payload=body)

    logger.debug("submitted job=%s", body["id"])
    return JobSubmission(id=body["id"], output_format=output_format)


def _is_in_progress(response: httpx.Response) -> bool:
    if response.status_code != 202:
        return False
    body = response_payload(response)
    return (
        isinstance(body, Mapping)
        and isinstance(body.get("id"), str)
        and body.get("status") == IN_PROGRESS
    )


async def interpret_result(
    response: httpx.Response,
    output_format: str,
    resource_tag: str,
    scratch: ScratchStorage,
    message: str,
    content_type: ContentType = ContentType.IMAGE,
) -> JobResult:
    """Classify one result fetch as in progress, finished, or failed.

    Shapes are tried in a fixed order: ``202`` with ``{"id", "status":
    "in-progress"}`` is a :class:`JobStatus`; ``200`` is decoded into a
    :class:`ContentResult`; anything else is raised through the error
    classifier.
    """
    if _is_in_progress(response):
        body = response.json()
        logger.debug("job=%s still in progress", body["id"])
        return JobStatus(id=body["id"])

    if response.status_code == 200:
        return await decode_content(
            response_payload(response), output_format, resource_tag, scratch, content_type
        )

    raise classify_error(response.status_code, message, response_payload(response))
