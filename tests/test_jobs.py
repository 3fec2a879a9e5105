"""Tests for the submit-then-poll job protocol."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from conftest import MP4_BYTES, PNG_BYTES, b64
from stabilityai import (
    ContentResult,
    ContentType,
    InvalidRequestError,
    JobStatus,
    JobSubmission,
    MalformedResponseError,
    RecordNotFoundError,
    UnknownError,
    interpret_result,
    parse_submission,
)

IN_PROGRESS = {"id": "abc123", "status": "in-progress"}


async def interpret(response: httpx.Response, scratch, content_type=ContentType.IMAGE):
    return await interpret_result(response, "png", "tag", scratch, "Failed to fetch", content_type)


@pytest.mark.anyio
async def test_in_progress_is_job_status(scratch) -> None:
    result = await interpret(httpx.Response(202, json=IN_PROGRESS), scratch)
    assert result == JobStatus(id="abc123", status="in-progress")


@pytest.mark.anyio
async def test_finished_is_content(scratch) -> None:
    response = httpx.Response(200, json={"image": b64(PNG_BYTES), "finish_reason": "SUCCESS", "seed": 3})
    result = await interpret(response, scratch)
    assert isinstance(result, ContentResult)
    assert Path(result.filepath).read_bytes() == PNG_BYTES
    assert result.seed == 3


@pytest.mark.anyio
async def test_finished_without_media_is_malformed(scratch) -> None:
    with pytest.raises(MalformedResponseError):
        await interpret(httpx.Response(200, json={"id": "abc123"}), scratch)


@pytest.mark.anyio
@pytest.mark.parametrize(
    "body",
    [
        {"id": "abc123", "status": "queued"},
        {"status": "in-progress"},
        {"id": 42, "status": "in-progress"},
        "in-progress",
    ],
)
async def test_202_without_job_shape_is_error(scratch, body) -> None:
    with pytest.raises(UnknownError) as exc_info:
        await interpret(httpx.Response(202, json=body), scratch)
    assert exc_info.value.status_code == 202


@pytest.mark.anyio
async def test_error_status_is_raised(scratch) -> None:
    body = {"name": "not_found", "errors": ["generation abc123 not found"]}
    with pytest.raises(RecordNotFoundError) as exc_info:
        await interpret(httpx.Response(404, json=body), scratch)
    assert exc_info.value.payload == body
    assert "generation abc123 not found" in str(exc_info.value)


@pytest.mark.anyio
async def test_non_json_error_body_is_kept_as_text(scratch) -> None:
    with pytest.raises(UnknownError) as exc_info:
        await interpret(httpx.Response(502, text="Bad Gateway"), scratch)
    assert exc_info.value.payload == "Bad Gateway"


@pytest.mark.anyio
async def test_polling_sequence(scratch) -> None:
    """N in-progress replies then one content reply yield N statuses and one result."""
    replies = [httpx.Response(202, json=IN_PROGRESS) for _ in range(3)]
    replies.append(
        httpx.Response(200, json={"video": b64(MP4_BYTES), "finish_reason": "SUCCESS", "seed": 9})
    )

    observed = []
    for reply in replies:
        result = await interpret(reply, scratch, ContentType.VIDEO)
        observed.append(result)
        if isinstance(result, ContentResult):
            break

    assert observed[:3] == [JobStatus(id="abc123")] * 3
    assert isinstance(observed[3], ContentResult)
    assert observed[3].content_type is ContentType.VIDEO


@pytest.mark.anyio
async def test_polling_stops_at_first_error(scratch) -> None:
    replies = iter(
        [
            httpx.Response(202, json=IN_PROGRESS),
            httpx.Response(400, json={"errors": ["id: invalid"]}),
            httpx.Response(200, json={"image": b64(PNG_BYTES)}),
        ]
    )
    polls = 0
    with pytest.raises(InvalidRequestError):
        while True:
            polls += 1
            await interpret(next(replies), scratch)
    assert polls == 2


def test_submission_ack() -> None:
    response = httpx.Response(200, json={"id": "abc123"})
    assert parse_submission(response, "webp", "Failed to start") == JobSubmission(
        id="abc123", output_format="webp"
    )


@pytest.mark.parametrize("body", [{}, {"id": 5}, [], {"id": "abc123", "image": b64(PNG_BYTES)}])
def test_submission_without_job_shape_is_malformed(body) -> None:
    with pytest.raises(MalformedResponseError):
        parse_submission(httpx.Response(200, json=body), "png", "Failed to start")


def test_submission_error_status() -> None:
    with pytest.raises(InvalidRequestError) as exc_info:
        parse_submission(httpx.Response(400, json={"errors": ["image: required"]}), "png", "Failed to start")
    assert str(exc_info.value).startswith("Failed to start: ")
