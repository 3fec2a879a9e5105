"""Resolution of user-supplied image references into local files.

An image argument may be either a public ``http(s)`` URL or a path to a file
on disk.  :class:`ImageReference` hides the difference: remote images are
downloaded lazily into scratch storage and deleted again by :meth:`cleanup`,
while local files are used in place and never touched.

Use it as an async context manager so the download is released even when the
request that needed it fails::

    async with await ImageReference.create(source, http, scratch) as ref:
        content = await ref.read()
"""
from __future__ import annotations

import contextlib
import enum
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO, Optional

import httpx

from .exceptions import InvalidInputError

if TYPE_CHECKING:
    from ._files import ScratchStorage
    from ._http import HttpClient

logger = logging.getLogger("stabilityai")

_REMOTE_SCHEMES = {"http", "https"}


class Origin(str, enum.Enum):
    REMOTE = "remote"
    LOCAL = "local"


def is_remote_url(source: str) -> bool:
    try:
        url = httpx.URL(source)
    except httpx.InvalidURL:
        return False
    return url.scheme in _REMOTE_SCHEMES and bool(url.host)


class ImageReference:
    """A single image input for one API call.

    Obtain via :meth:`create`; the constructor does no classification of its
    own.  The reference exclusively owns any file it downloaded and never
    deletes a caller's local file.
    """

    def __init__(self, source: str, origin: Origin, http: "HttpClient", scratch: "ScratchStorage"):
        self.source = source
        self.origin = origin
        self._http = http
        self._scratch = scratch
        self._downloaded: Optional[Path] = None

    @classmethod
    async def create(cls, source: str | os.PathLike, http: "HttpClient", scratch: "ScratchStorage") -> "ImageReference":
        """Classify *source* as a remote URL or an existing local file.

        The URL check comes first; only when *source* is not an ``http``/``https``
        URL is the filesystem probed.

        Raises:
            InvalidInputError: if *source* is neither.
        """
        source = os.fspath(source)
        if is_remote_url(source):
            return cls(source, Origin.REMOTE, http, scratch)
        if source and await scratch.is_file(source):
            return cls(source, Origin.LOCAL, http, scratch)
        raise InvalidInputError(f"Image is neither an http(s) URL nor an existing file: {source!r}")

    @property
    def materialized_path(self) -> Optional[str]:
        if self.origin is Origin.LOCAL:
            return self.source
        return str(self._downloaded) if self._downloaded else None

    @property
    def filename(self) -> str:
        if self.origin is Origin.REMOTE:
            name = httpx.URL(self.source).path.rsplit("/", 1)[-1]
            return name or "image"
        return Path(self.source).name

    async def materialize(self) -> str:
        """Return a local path holding the image, downloading it on first use."""
        if self.origin is Origin.LOCAL:
            return self.source
        if self._downloaded is None:
            dest = self._scratch.unique_path("image", "png")
            await self._http.download(self.source, self._scratch, dest)
            self._downloaded = dest
        return str(self._downloaded)

    async def read(self) -> bytes:
        return await self._scratch.read_file(await self.materialize())

    async def open_upload(self, stack: contextlib.AsyncExitStack) -> tuple[str, BinaryIO]:
        """``(filename, file)`` pair for a multipart file field.

        The file is streamed from disk by httpx and stays open until *stack*
        closes, which happens before :meth:`cleanup` when this reference was
        entered on the same stack.
        """
        path = await self.materialize()
        return self.filename, stack.enter_context(open(path, "rb"))

    async def cleanup(self) -> None:
        """Delete the owned download, if any.  Safe to call repeatedly."""
        if self._downloaded is None:
            return
        path, self._downloaded = self._downloaded, None
        await self._scratch.delete_file(path)

    async def __aenter__(self) -> "ImageReference":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.cleanup()

    def __repr__(self) -> str:
        return f"<ImageReference origin={self.origin.value} source={self.source!r}>"
