from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from .._http import response_payload
from ..content import ContentResult, ContentType, decode_content
from ..exceptions import classify_error
from ..image_reference import ImageReference
from ..jobs import JobResult, JobSubmission, interpret_result, parse_submission

if TYPE_CHECKING:
    import os

    import httpx

    from .._files import ScratchStorage
    from .._http import HttpClient
    from ..endpoints import Endpoint

logger = logging.getLogger("stabilityai")

ImageSource = Union[str, "os.PathLike[str]"]


def compact(**fields: Any) -> dict[str, Any]:
    """Drop unset (``None``) fields; falsy values such as ``seed=0`` are kept."""
    return {key: value for key, value in fields.items() if value is not None}


class Resource:
    def __init__(self, http: "HttpClient", scratch: "ScratchStorage"):
        self._http = http
        self._scratch = scratch

    async def _uploads(
        self, stack: contextlib.AsyncExitStack, images: Mapping[str, Optional[ImageSource]]
    ) -> dict[str, tuple[str, Any]]:
        """Resolve each image into a multipart file field.

        Every reference is registered on *stack* as soon as it exists, so
        downloads already made are deleted if a later one fails.
        """
        files: dict[str, tuple[str, Any]] = {}
        for field, source in images.items():
            if source is None:
                continue
            ref = await stack.enter_async_context(
                await ImageReference.create(source, self._http, self._scratch)
            )
            files[field] = await ref.open_upload(stack)
        return files

    async def _post_form(
        self,
        endpoint: "Endpoint",
        data: dict[str, Any],
        images: Mapping[str, Optional[ImageSource]],
        accept: Optional[str] = "application/json",
    ) -> "httpx.Response":
        async with contextlib.AsyncExitStack() as stack:
            files = await self._uploads(stack, images)
            return await self._http.post_form(endpoint, data, files, accept=accept)

    async def _generate(
        self,
        endpoint: "Endpoint",
        data: dict[str, Any],
        images: Mapping[str, Optional[ImageSource]],
        output_format: str,
        message: str,
        content_type: ContentType = ContentType.IMAGE,
    ) -> ContentResult:
        response = await self._post_form(endpoint, data, images)
        if response.status_code != 200:
            raise classify_error(response.status_code, message, response_payload(response))
        return await decode_content(
            response_payload(response), output_format, endpoint.tag, self._scratch, content_type
        )

    async def _submit(
        self,
        endpoint: "Endpoint",
        data: dict[str, Any],
        images: Mapping[str, Optional[ImageSource]],
        output_format: str,
        message: str,
        content_type: ContentType = ContentType.IMAGE,
    ) -> JobSubmission:
        response = await self._post_form(endpoint, data, images)
        return parse_submission(response, output_format, message, content_type)

    async def _fetch_result(
        self,
        endpoint: "Endpoint",
        job_id: str,
        output_format: str,
        message: str,
        content_type: ContentType = ContentType.IMAGE,
    ) -> JobResult:
        response = await self._http.get(endpoint, job_id)
        return await interpret_result(
            response, output_format, endpoint.tag, self._scratch, message, content_type
        )
