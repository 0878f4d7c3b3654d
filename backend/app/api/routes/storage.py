"""Blob view route — serves local blobs at their record URL."""

from __future__ import annotations

import mimetypes

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from app.exceptions import DocumentNotFound
from app.services import get_local_blob_store

router = APIRouter()


@router.get("/buckets/{bucket_id}/files/{file_id}/view")
async def view_file(bucket_id: str, file_id: str):
    """Stream a blob stored by the local backend."""
    blobs = get_local_blob_store()
    if blobs is None:
        raise HTTPException(404, "Blobs are served by the remote storage backend")

    try:
        path = await blobs.find(bucket_id, file_id)
        content = await blobs.read_file(bucket_id, file_id)
    except DocumentNotFound:
        raise HTTPException(404, "File not found")

    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'inline; filename="{path.name}"'},
    )
