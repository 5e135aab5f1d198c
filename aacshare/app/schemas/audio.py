# aacshare/app/schemas/audio.py
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from aacshare.app.core.errors import EmptyUpdate


class AudioUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    duration: Optional[int] = Field(default=None, ge=0)

    def changes(self) -> dict:
        """Fields the client actually sent, ready for UPDATE ... SET."""
        return self.model_dump(exclude_none=True)

    @model_validator(mode="after")
    def check_not_empty(self) -> "AudioUpdate":
        if self.title is None and self.duration is None:
            raise ValueError(EmptyUpdate.message)
        return self


class SharedUser(BaseModel):
    id: int
    name: str


class AudioRecord(BaseModel):
    id: int
    name: str
    is_owner: bool
    owner_id: int
    owner_name: str
    # None means "not shared with anybody"; never an empty list
    shared_to: Optional[List[SharedUser]] = None


class AudioListResponse(BaseModel):
    total_count: int
    records: List[AudioRecord]


class DownloadAudio(BaseModel):
    title: str
    file_path: str
