"""Shared pytest fixtures for stabilityai tests.

The API is faked with ``httpx.MockTransport``; tests use the anyio pytest
plugin on the asyncio backend.
"""

from __future__ import annotations

import base64
import re
from pathlib import Path
from typing import Callable

import httpx
import pytest

from stabilityai import StabilityAI
from stabilityai._files import ScratchStorage
from stabilityai._http import HttpClient
from stabilityai.config import Credentials

API_KEY = "sk-test"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-body"
MP4_BYTES = b"\x00\x00\x00\x18ftypmp42fake-video"
GLB_BYTES = b"glTF\x02\x00\x00\x00fake-model"


def b64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def multipart_fields(request: httpx.Request) -> dict[str, bytes]:
    """Split a multipart request body into ``{field name: raw value}``."""
    boundary = request.headers["content-type"].split("boundary=")[1].encode()
    fields: dict[str, bytes] = {}
    for part in request.content.split(b"--" + boundary):
        head, sep, body = part.partition(b"\r\n\r\n")
        if not sep:
            continue
        match = re.search(rb'name="([^"]*)"', head)
        if match:
            fields[match.group(1).decode()] = body[:-2]
    return fields


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def scratch(scratch_dir: Path) -> ScratchStorage:
    return ScratchStorage(scratch_dir)


@pytest.fixture
def local_image(tmp_path: Path) -> Path:
    path = tmp_path / "input.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def make_http() -> Callable[..., HttpClient]:
    def factory(handler) -> HttpClient:
        return HttpClient(
            Credentials(api_key=API_KEY),
            base_url="https://api.stability.ai",
            transport=httpx.MockTransport(handler),
        )

    return factory


@pytest.fixture
def make_client(scratch_dir: Path) -> Callable[..., StabilityAI]:
    def factory(handler, **kwargs) -> StabilityAI:
        return StabilityAI(
            api_key=API_KEY,
            scratch_dir=scratch_dir,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return factory
