from typing import Any, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from mockshare.comments.schemas import CommentResponse


class VersionCutResponse(BaseModel):
    previous_version: int
    new_version: int
    snapshot_id: str


class VersionListItem(BaseModel):
    # Null for the live version, which has no archive row
    id: Optional[str] = None
    version_number: int
    created_at: Optional[datetime] = None
    is_current: bool = False


class VersionSnapshotResponse(BaseModel):
    id: str
    mockup_id: str
    version_number: int
    content: Any
    comment_snapshot: List[CommentResponse]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
