"""Scratch storage for downloaded inputs and generated outputs."""
from __future__ import annotations

import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles
import aiofiles.os

logger = logging.getLogger("stabilityai")


class ScratchStorage:
    """Async file operations rooted in one scratch directory.

    Every path handed out by :meth:`unique_path` carries a fresh UUID, so
    concurrent calls sharing the directory never collide and no locking is
    needed.
    """

    def __init__(self, directory: Optional[str | os.PathLike] = None):
        self.directory = Path(directory or tempfile.gettempdir())

    def unique_path(self, prefix: str, extension: str) -> Path:
        return self.directory / f"{prefix}_{uuid.uuid4().hex}.{extension.lstrip('.')}"

    async def write_file(self, path: Path, content: bytes) -> None:
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
        async with aiofiles.open(path, "wb") as f:
            await f.write(content)

    async def write_stream(self, path: Path, chunks: AsyncIterator[bytes]) -> None:
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
        async with aiofiles.open(path, "wb") as f:
            async for chunk in chunks:
                await f.write(chunk)

    async def read_file(self, path: str | os.PathLike) -> bytes:
        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    async def exists(self, path: str | os.PathLike) -> bool:
        return bool(await aiofiles.os.path.exists(path))

    async def is_file(self, path: str | os.PathLike) -> bool:
        return bool(await aiofiles.os.path.isfile(path))

    async def delete_file(self, path: str | os.PathLike) -> None:
        if await self.exists(path):
            await aiofiles.os.remove(path)
            logger.debug("deleted %s", path)
