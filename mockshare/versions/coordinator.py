import copy
import logging

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from mockshare.comments.models import Comment
from mockshare.comments.service import freeze_comment
from mockshare.database import transactional
from mockshare.errors import VersionConflict
from mockshare.mockups.models import Mockup
from mockshare.mockups.service import MockupService
from mockshare.shared.models import utcnow
from mockshare.versions.schemas import VersionCutResponse
from mockshare.versions.service import VersionArchive

logger = logging.getLogger(__name__)


class VersioningCoordinator:
    """Cuts new versions: Editing(v) -> Editing(v + 1).

    A cut is a checkpoint, not an edit. The live content is archived as
    version v and carried forward unchanged as v + 1. Live comments of v move
    into the snapshot and the ledger starts empty for v + 1, so a comment's
    version number never changes after it is created.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.mockups = MockupService(db)
        self.archive = VersionArchive(db)

    async def cut_version(self, mockup_id: str) -> VersionCutResponse:
        async with transactional(self.db):
            # 1. Lock the mockup so concurrent cuts and comment writes queue behind us
            mockup = await self.mockups.get_mockup(mockup_id, lock="update")
            previous_version = mockup.current_version

            result = await self.db.execute(
                select(Comment)
                .where(Comment.mockup_id == mockup_id, Comment.version_number == previous_version)
                .order_by(Comment.created_at, Comment.id)
            )
            comments = [freeze_comment(c) for c in result.scalars().all()]

            # 2. Archive the outgoing version
            snapshot = await self.archive.archive(
                mockup_id,
                previous_version,
                content=copy.deepcopy(mockup.content),
                comments=comments,
            )

            # 3. Advance the counter, only if nobody else did in the meantime
            new_version = previous_version + 1
            now = utcnow()
            result = await self.db.execute(
                update(Mockup)
                .where(Mockup.id == mockup_id, Mockup.current_version == previous_version)
                .values(current_version=new_version, updated_at=now)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise VersionConflict(
                    f"Mockup {mockup_id} moved past version {previous_version} during the cut"
                )

            # 4. Clean cut: the snapshot is now the only record of v's comments
            await self.db.execute(
                delete(Comment).where(
                    Comment.mockup_id == mockup_id,
                    Comment.version_number == previous_version,
                )
            )

        set_committed_value(mockup, "current_version", new_version)
        set_committed_value(mockup, "updated_at", now)
        logger.info(
            f"Cut mockup {mockup_id}: archived version {previous_version} "
            f"with {len(comments)} comments, now editing version {new_version}"
        )
        return VersionCutResponse(
            previous_version=previous_version,
            new_version=new_version,
            snapshot_id=snapshot.id,
        )
