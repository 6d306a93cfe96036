from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sharelink.domain.entities import FileRecord


class ShareRequestDTO(BaseModel):
    file_id: int = Field(alias="fileId", gt=0)

    model_config = ConfigDict(validate_by_name=True)


class FileDTO(BaseModel):
    id: str
    filename: str
    original_name: str
    size: int
    type: str
    is_shared: bool
    uploaded_at: datetime
    uploaded_by: str
    url: str

    @classmethod
    def from_record(cls, record: FileRecord, uploaded_by: str) -> FileDTO:
        return cls(
            id=str(record.id),
            filename=record.storage_ref.id,
            original_name=record.original_name,
            size=record.storage_ref.size,
            type=record.storage_ref.mime_type,
            is_shared=record.is_shared,
            uploaded_at=record.created_at,
            uploaded_by=uploaded_by,
            url=record.storage_ref.url,
        )


class ShareResponseDTO(BaseModel):
    share_url: str = Field(serialization_alias="shareUrl")
    share_token: str = Field(serialization_alias="shareToken")
    expires_at: datetime = Field(serialization_alias="expiresAt")


class OkDTO(BaseModel):
    ok: bool = True
