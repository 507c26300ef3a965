from typing import List, Optional
from fastapi import APIRouter, Depends, Header, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from mockshare.database import get_db
from mockshare.auth.dependencies import get_current_designer, get_optional_designer
from mockshare.comments.schemas import (
    CommentCreate,
    CommentResolve,
    CommentResponse,
    CommentsCleared,
    CommentUpdate,
)
from mockshare.comments.service import CommentLedger
from mockshare.mockups.dependencies import require_viewer_access, requested_version
from mockshare.mockups.models import Mockup

router = APIRouter(prefix="/mockups", tags=["comments"])


@router.get("/{mockup_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    mockup_id: str,
    version: Optional[int] = Depends(requested_version),
    mockup: Mockup = Depends(require_viewer_access),
    db: AsyncSession = Depends(get_db),
):
    ledger = CommentLedger(db)
    return await ledger.list_comments(mockup_id, version)


@router.post(
    "/{mockup_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    mockup_id: str,
    comment: CommentCreate,
    mockup: Mockup = Depends(require_viewer_access),
    db: AsyncSession = Depends(get_db),
):
    ledger = CommentLedger(db)
    return await ledger.add_comment(mockup_id, comment)


@router.put("/{mockup_id}/comments/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    mockup_id: str,
    comment_id: str,
    comment: CommentUpdate,
    author_token: Optional[str] = Header(None, alias="X-Author-Token"),
    db: AsyncSession = Depends(get_db),
):
    ledger = CommentLedger(db)
    return await ledger.edit_comment(mockup_id, comment_id, comment.body, author_token)


@router.put("/{mockup_id}/comments/{comment_id}/resolve", response_model=CommentResponse)
async def resolve_comment(
    mockup_id: str,
    comment_id: str,
    resolve: CommentResolve,
    designer: str = Depends(get_current_designer),
    db: AsyncSession = Depends(get_db),
):
    ledger = CommentLedger(db)
    return await ledger.resolve_comment(mockup_id, comment_id, resolve.resolved)


@router.delete("/{mockup_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    mockup_id: str,
    comment_id: str,
    author_token: Optional[str] = Header(None, alias="X-Author-Token"),
    designer: Optional[str] = Depends(get_optional_designer),
    db: AsyncSession = Depends(get_db),
):
    ledger = CommentLedger(db)
    await ledger.delete_comment(
        mockup_id, comment_id, author_token=author_token, is_designer=designer is not None
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{mockup_id}/comments", response_model=CommentsCleared)
async def delete_all_comments(
    mockup_id: str,
    designer: str = Depends(get_current_designer),
    db: AsyncSession = Depends(get_db),
):
    ledger = CommentLedger(db)
    deleted = await ledger.delete_all_comments(mockup_id)
    return {"deleted": deleted}
