"""File API routes — upload, list, rename, share, delete."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from app.api.deps import file_service, get_current_user
from app.constants import DEFAULT_SORT
from app.schemas.auth import CurrentUser
from app.schemas.files import (
    DeleteResult,
    FileList,
    FileRecord,
    FileType,
    RenameFileRequest,
    UpdateFileUsersRequest,
)
from app.services.file_service import FileService

router = APIRouter()


@router.post("/upload", response_model=FileRecord, status_code=201)
async def upload_file(
    file: UploadFile = File(...),
    path: str = Form("/"),
    current_user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(file_service),
):
    """Store the bytes and create the file record, owned by the current user."""
    contents = await file.read()
    return await service.upload(
        contents,
        file.filename or "unnamed",
        owner_id=current_user.id,
        account_id=current_user.account_id,
        path=path,
    )


@router.get("", response_model=FileList)
async def list_files(
    types: list[FileType] = Query(default=[]),
    search: str = "",
    sort: str = DEFAULT_SORT,
    limit: int | None = Query(default=None, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(file_service),
):
    """Files owned by or shared with the current user."""
    return await service.list_files(
        current_user,
        types=[t.value for t in types],
        search_text=search,
        sort=sort,
        limit=limit,
    )


@router.patch("/{file_id}/name", response_model=FileRecord)
async def rename_file(
    file_id: str,
    body: RenameFileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(file_service),
):
    return await service.rename(file_id, body.name, body.extension, body.path)


@router.put("/{file_id}/users", response_model=FileRecord)
async def update_file_users(
    file_id: str,
    body: UpdateFileUsersRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(file_service),
):
    """Replace the list of emails the file is shared with."""
    return await service.update_access(file_id, body.emails, body.path)


@router.delete("/{file_id}", response_model=DeleteResult)
async def delete_file(
    file_id: str,
    blob_id: str,
    path: str = "/",
    current_user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(file_service),
):
    return await service.delete(file_id, blob_id, path)
