import logging
import secrets
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from mockshare.comments.models import Comment
from mockshare.comments.schemas import CommentCreate, CommentResponse
from mockshare.database import transactional
from mockshare.errors import Forbidden, NotFound
from mockshare.mockups.service import MockupService
from mockshare.versions.service import VersionArchive

logger = logging.getLogger(__name__)


def token_matches(supplied: Optional[str], stored: str) -> bool:
    if not supplied:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), stored.encode("utf-8"))


def freeze_comment(comment: Comment) -> Dict[str, Any]:
    """JSON-safe copy of a comment for a version snapshot, without its author token."""
    return CommentResponse.model_validate(comment).model_dump(mode="json")


class CommentLedger:
    """Live comments of a mockup's current version.

    Comments of past versions are only reachable through the frozen
    ``comment_snapshot`` of the matching archived version.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.mockups = MockupService(db)

    async def _live_comments(self, mockup_id: str, version_number: int) -> List[Comment]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.mockup_id == mockup_id, Comment.version_number == version_number)
            .order_by(Comment.created_at, Comment.id)
        )
        return list(result.scalars().all())

    async def _get_comment(self, mockup_id: str, comment_id: str) -> Comment:
        # Shared lock keeps a concurrent version cut from snapshotting mid-change
        mockup = await self.mockups.get_mockup(mockup_id, lock="share")
        result = await self.db.execute(
            select(Comment).where(
                Comment.id == comment_id,
                Comment.mockup_id == mockup_id,
                Comment.version_number == mockup.current_version,
            )
        )
        comment = result.scalar_one_or_none()
        if not comment:
            raise NotFound("Comment not found")
        return comment

    async def add_comment(self, mockup_id: str, comment_in: CommentCreate) -> Comment:
        async with transactional(self.db):
            mockup = await self.mockups.get_mockup(mockup_id, lock="share")
            comment = Comment(
                mockup_id=mockup_id,
                version_number=mockup.current_version,
                **comment_in.model_dump(),
                resolved=False,
            )
            self.db.add(comment)
        await self.db.refresh(comment)
        return comment

    async def list_comments(
        self, mockup_id: str, version: Optional[int] = None
    ) -> List[CommentResponse]:
        """Comments in creation order, live for the current version, frozen for past ones."""
        mockup = await self.mockups.get_mockup(mockup_id)
        if version is None or version == mockup.current_version:
            comments = await self._live_comments(mockup_id, mockup.current_version)
            return [CommentResponse.model_validate(c) for c in comments]

        if version > mockup.current_version:
            raise NotFound(f"Version {version} not found")
        snapshot = await VersionArchive(self.db).get_snapshot(mockup_id, version)
        return [CommentResponse.model_validate(c) for c in snapshot.comment_snapshot]

    async def edit_comment(
        self, mockup_id: str, comment_id: str, body: str, author_token: Optional[str]
    ) -> Comment:
        async with transactional(self.db):
            comment = await self._get_comment(mockup_id, comment_id)
            if not token_matches(author_token, comment.author_token):
                logger.warning(f"Rejected edit of comment {comment_id} on mockup {mockup_id}")
                raise Forbidden()
            comment.body = body
        await self.db.refresh(comment)
        return comment

    async def resolve_comment(self, mockup_id: str, comment_id: str, resolved: bool) -> Comment:
        """Designer-only toggle; the router enforces who may call it."""
        async with transactional(self.db):
            comment = await self._get_comment(mockup_id, comment_id)
            comment.resolved = resolved
        await self.db.refresh(comment)
        return comment

    async def delete_comment(
        self,
        mockup_id: str,
        comment_id: str,
        author_token: Optional[str] = None,
        is_designer: bool = False,
    ) -> None:
        async with transactional(self.db):
            comment = await self._get_comment(mockup_id, comment_id)
            if not is_designer and not token_matches(author_token, comment.author_token):
                logger.warning(f"Rejected delete of comment {comment_id} on mockup {mockup_id}")
                raise Forbidden()
            await self.db.delete(comment)

    async def delete_all_comments(self, mockup_id: str) -> int:
        async with transactional(self.db):
            mockup = await self.mockups.get_mockup(mockup_id, lock="share")
            result = await self.db.execute(
                delete(Comment).where(
                    Comment.mockup_id == mockup_id,
                    Comment.version_number == mockup.current_version,
                )
            )
        logger.info(f"Cleared {result.rowcount} comments on mockup {mockup_id}")
        return result.rowcount
