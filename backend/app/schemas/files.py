"""File record schemas — documents in the files collection."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FileType(str, Enum):
    """Category of a stored file, derived from its extension."""
    IMAGE = "image"
    DOCUMENT = "document"
    VIDEO = "video"
    AUDIO = "audio"
    OTHER = "other"


class CamelModel(BaseModel):
    """Base for document-shaped models: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileRecord(CamelModel):
    """Metadata of one uploaded file."""
    id: str
    type: FileType
    name: str
    extension: str
    url: str
    size: int
    owner: str
    account_id: str
    users: list[str] = Field(default_factory=list)
    blob_id: str
    created_at: datetime
    updated_at: datetime


class FileList(CamelModel):
    """Result of a file listing."""
    total: int
    documents: list[FileRecord]


class RenameFileRequest(CamelModel):
    name: str = Field(min_length=1)
    extension: str
    path: str = "/"


class UpdateFileUsersRequest(CamelModel):
    emails: list[str]
    path: str = "/"


class DeleteResult(BaseModel):
    status: str = "success"
