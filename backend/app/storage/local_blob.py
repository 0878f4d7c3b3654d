"""Local BlobStore — buckets as directories on disk."""

from __future__ import annotations

import logging
import mimetypes
import re
from pathlib import Path

import aiofiles
import aiofiles.os

from app.exceptions import DocumentNotFound, UpstreamFailure
from app.storage import BlobFile

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class LocalBlobStore:
    """Stores each object as ``<base>/<bucket>/<file_id>/<filename>``."""

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _object_dir(self, bucket_id: str, file_id: str) -> Path:
        if not (_SAFE_ID.match(bucket_id) and _SAFE_ID.match(file_id)):
            raise DocumentNotFound(f"Invalid blob address: {bucket_id}/{file_id}")
        return self.base_path / bucket_id / file_id

    async def create_file(self, bucket_id: str, file_id: str, data: bytes, filename: str) -> BlobFile:
        name = Path(filename).name or "unnamed"
        object_dir = self._object_dir(bucket_id, file_id)
        try:
            await aiofiles.os.makedirs(object_dir)
        except OSError as exc:
            raise UpstreamFailure(f"Could not store blob {bucket_id}/{file_id}: {exc}") from exc

        try:
            async with aiofiles.open(object_dir / name, "wb") as f:
                await f.write(data)
        except OSError as exc:
            await self._remove_tree(object_dir)
            raise UpstreamFailure(f"Could not store blob {bucket_id}/{file_id}: {exc}") from exc

        logger.debug("Stored blob %s/%s (%d bytes)", bucket_id, file_id, len(data))
        return BlobFile(
            id=file_id,
            name=name,
            size=len(data),
            mime_type=mimetypes.guess_type(name)[0],
        )

    async def read_file(self, bucket_id: str, file_id: str) -> bytes:
        path = await self.find(bucket_id, file_id)
        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    async def delete_file(self, bucket_id: str, file_id: str) -> None:
        path = await self.find(bucket_id, file_id)
        try:
            await aiofiles.os.remove(path)
            await aiofiles.os.rmdir(path.parent)
        except OSError as exc:
            raise UpstreamFailure(f"Could not delete blob {bucket_id}/{file_id}: {exc}") from exc

    async def find(self, bucket_id: str, file_id: str) -> Path:
        """Path of the single file stored under a blob id."""
        object_dir = self._object_dir(bucket_id, file_id)
        if await aiofiles.os.path.isdir(object_dir):
            for entry in sorted(await aiofiles.os.listdir(object_dir)):
                if await aiofiles.os.path.isfile(object_dir / entry):
                    return object_dir / entry
        raise DocumentNotFound(f"Blob not found: {bucket_id}/{file_id}")

    async def _remove_tree(self, object_dir: Path) -> None:
        try:
            for entry in await aiofiles.os.listdir(object_dir):
                await aiofiles.os.remove(object_dir / entry)
            await aiofiles.os.rmdir(object_dir)
        except OSError as exc:
            logger.warning("Could not clean up %s: %s", object_dir, exc)
