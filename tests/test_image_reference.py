"""Tests for resolving image arguments into local files."""

from __future__ import annotations

import contextlib
from pathlib import Path

import httpx
import pytest

from conftest import PNG_BYTES
from stabilityai import ImageReference, InvalidInputError, Origin
from stabilityai.image_reference import is_remote_url

REMOTE_URL = "https://images.example/photos/cat.png"


def remote_handler(calls: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, content=PNG_BYTES)

    return handler


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("https://images.example/cat.png", True),
        ("http://images.example/cat.png?size=large", True),
        ("ftp://images.example/cat.png", False),
        ("file:///tmp/cat.png", False),
        ("/tmp/cat.png", False),
        ("cat.png", False),
        ("https://", False),
        ("", False),
    ],
)
def test_is_remote_url(source: str, expected: bool) -> None:
    assert is_remote_url(source) is expected


@pytest.mark.anyio
async def test_url_is_remote_without_io(make_http, scratch) -> None:
    calls: list[httpx.Request] = []
    async with make_http(remote_handler(calls)) as http:
        ref = await ImageReference.create(REMOTE_URL, http, scratch)

    assert ref.origin is Origin.REMOTE
    assert ref.materialized_path is None
    assert calls == []


@pytest.mark.anyio
async def test_existing_file_is_local(make_http, scratch, local_image: Path) -> None:
    async with make_http(remote_handler([])) as http:
        ref = await ImageReference.create(local_image, http, scratch)

    assert ref.origin is Origin.LOCAL
    assert ref.materialized_path == str(local_image)
    assert await ref.materialize() == str(local_image)


@pytest.mark.anyio
@pytest.mark.parametrize("source", ["does-not-exist.png", "ftp://images.example/cat.png", ""])
async def test_unresolvable_source_fails(make_http, scratch, source: str) -> None:
    async with make_http(remote_handler([])) as http:
        with pytest.raises(InvalidInputError):
            await ImageReference.create(source, http, scratch)


@pytest.mark.anyio
async def test_directory_is_not_a_local_image(make_http, scratch, tmp_path: Path) -> None:
    async with make_http(remote_handler([])) as http:
        with pytest.raises(InvalidInputError):
            await ImageReference.create(tmp_path, http, scratch)


@pytest.mark.anyio
async def test_remote_download_is_cached(make_http, scratch, scratch_dir: Path) -> None:
    calls: list[httpx.Request] = []
    async with make_http(remote_handler(calls)) as http:
        ref = await ImageReference.create(REMOTE_URL, http, scratch)
        first = await ref.materialize()
        second = await ref.materialize()

    assert first == second
    assert len(calls) == 1
    assert Path(first).parent == scratch_dir
    assert Path(first).read_bytes() == PNG_BYTES
    assert "authorization" not in calls[0].headers


@pytest.mark.anyio
async def test_cleanup_deletes_download_and_rematerialize_fetches_again(make_http, scratch) -> None:
    calls: list[httpx.Request] = []
    async with make_http(remote_handler(calls)) as http:
        ref = await ImageReference.create(REMOTE_URL, http, scratch)
        first = await ref.materialize()
        await ref.cleanup()

        assert not Path(first).exists()
        assert ref.materialized_path is None

        second = await ref.materialize()

    assert len(calls) == 2
    assert second != first
    assert Path(second).exists()


@pytest.mark.anyio
async def test_cleanup_is_idempotent_and_noop_before_download(make_http, scratch) -> None:
    calls: list[httpx.Request] = []
    async with make_http(remote_handler(calls)) as http:
        ref = await ImageReference.create(REMOTE_URL, http, scratch)
        await ref.cleanup()
        path = await ref.materialize()
        await ref.cleanup()
        await ref.cleanup()

    assert not Path(path).exists()
    assert len(calls) == 1


@pytest.mark.anyio
async def test_cleanup_never_touches_local_file(make_http, scratch, local_image: Path) -> None:
    async with make_http(remote_handler([])) as http:
        async with await ImageReference.create(local_image, http, scratch) as ref:
            assert await ref.read() == PNG_BYTES
        await ref.cleanup()

    assert local_image.read_bytes() == PNG_BYTES


@pytest.mark.anyio
async def test_context_manager_releases_download_on_error(make_http, scratch) -> None:
    async with make_http(remote_handler([])) as http:
        with pytest.raises(RuntimeError):
            async with await ImageReference.create(REMOTE_URL, http, scratch) as ref:
                path = await ref.materialize()
                raise RuntimeError("request failed")

    assert not Path(path).exists()


@pytest.mark.anyio
async def test_download_error_status_propagates(make_http, scratch, scratch_dir: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="gone")

    async with make_http(handler) as http:
        ref = await ImageReference.create(REMOTE_URL, http, scratch)
        with pytest.raises(httpx.HTTPStatusError):
            await ref.materialize()

    assert ref.materialized_path is None
    assert list(scratch_dir.glob("image_*")) == []


@pytest.mark.anyio
async def test_download_network_error_propagates_unwrapped(make_http, scratch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_http(handler) as http:
        ref = await ImageReference.create(REMOTE_URL, http, scratch)
        with pytest.raises(httpx.ConnectError):
            await ref.materialize()


@pytest.mark.anyio
async def test_references_to_same_url_download_independently(make_http, scratch) -> None:
    calls: list[httpx.Request] = []
    async with make_http(remote_handler(calls)) as http:
        a = await ImageReference.create(REMOTE_URL, http, scratch)
        b = await ImageReference.create(REMOTE_URL, http, scratch)
        path_a = await a.materialize()
        path_b = await b.materialize()
        await a.cleanup()

        assert path_a != path_b
        assert Path(path_b).exists()
        await b.cleanup()

    assert len(calls) == 2


def test_remote_filename_comes_from_url_path() -> None:
    ref = ImageReference(REMOTE_URL, Origin.REMOTE, http=None, scratch=None)
    assert ref.filename == "cat.png"


@pytest.mark.anyio
async def test_download_follows_redirects(make_http, scratch, scratch_dir: Path) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.host == "images.example":
            return httpx.Response(302, headers={"location": "https://cdn.example/real.png"})
        return httpx.Response(200, content=PNG_BYTES)

    async with make_http(handler) as http:
        ref = await ImageReference.create("https://images.example/short", http, scratch)
        path = await ref.materialize()

    assert [str(r.url) for r in calls] == ["https://images.example/short", "https://cdn.example/real.png"]
    assert Path(path).read_bytes() == PNG_BYTES
    assert Path(path).parent == scratch_dir


@pytest.mark.anyio
async def test_upload_streams_from_an_open_file(make_http, scratch, local_image: Path) -> None:
    async with make_http(remote_handler([])) as http:
        ref = await ImageReference.create(local_image, http, scratch)
        async with contextlib.AsyncExitStack() as stack:
            filename, upload = await ref.open_upload(stack)
            assert filename == "input.png"
            assert not upload.closed
            assert upload.read() == PNG_BYTES

    assert upload.closed
    assert local_image.read_bytes() == PNG_BYTES


@pytest.mark.anyio
async def test_remote_upload_closed_before_download_deleted(make_http, scratch) -> None:
    async with make_http(remote_handler([])) as http:
        async with contextlib.AsyncExitStack() as stack:
            ref = await stack.enter_async_context(await ImageReference.create(REMOTE_URL, http, scratch))
            filename, upload = await ref.open_upload(stack)
            path = ref.materialized_path
            assert filename == "cat.png"

    assert upload.closed
    assert not Path(path).exists()
