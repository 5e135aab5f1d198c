# aacshare/app/schemas/share.py
from typing import List

from pydantic import BaseModel, Field


class ShareInput(BaseModel):
    share_to: int = Field(..., gt=0)


class ShareCount(BaseModel):
    id: int
    name: str
    shared_records: int


class ShareListResponse(BaseModel):
    total_count: int
    users: List[ShareCount]
