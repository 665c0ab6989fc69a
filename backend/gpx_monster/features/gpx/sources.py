"""
Input sources for the batch processor.

A source is anything with a `name` and an awaitable `read()` returning
the document text. The processor awaits each read before starting the
next one.
"""

import asyncio
from pathlib import Path
from typing import Any, Protocol

from .exceptions import SourceReadError


class GPXSource(Protocol):
    """One input file."""

    name: str

    async def read(self) -> str:
        ...


def decode_content(content: bytes, name: str) -> str:
    """
    Decode raw bytes as UTF-8 (BOM allowed).

    Raises:
        SourceReadError: If the bytes are not valid UTF-8
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise SourceReadError(f"Error reading file {name}: {e}") from e


class TextSource:
    """In-memory document, e.g. for tests or already-loaded content."""

    def __init__(self, name: str, content: str):
        self.name = name
        self.content = content

    async def read(self) -> str:
        return self.content

    def __repr__(self):
        return f"<TextSource {self.name}>"


class PathSource:
    """GPX file on the local filesystem."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.name = self.path.name

    async def read(self) -> str:
        try:
            content = await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise SourceReadError(f"Error reading file {self.name}: {e}") from e
        return decode_content(content, self.name)

    def __repr__(self):
        return f"<PathSource {self.path}>"


class UploadSource:
    """
    Adapter over an uploaded file (FastAPI/Starlette UploadFile).

    Content is read lazily, so uploads are consumed one at a time in
    processing order.
    """

    def __init__(self, upload: Any):
        self.upload = upload
        self.name = upload.filename or "upload.gpx"

    async def read(self) -> str:
        try:
            content = await self.upload.read()
        except OSError as e:
            raise SourceReadError(f"Error reading file {self.name}: {e}") from e
        return decode_content(content, self.name)

    def __repr__(self):
        return f"<UploadSource {self.name}>"
