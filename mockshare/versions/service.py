import logging
from typing import Any, Dict, List, Literal

from sqlalchemy import select, asc, desc, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mockshare.database import transactional
from mockshare.errors import CannotDeleteCurrentVersion, NotFound, VersionConflict
from mockshare.mockups.models import Mockup
from mockshare.versions.models import VersionSnapshot
from mockshare.versions.schemas import VersionListItem

logger = logging.getLogger(__name__)


class VersionArchive:
    """Append-only store of past mockup versions.

    The live version is never stored here; it is the Mockup row itself plus
    the live comment ledger.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_mockup(self, mockup_id: str) -> Mockup:
        result = await self.db.execute(select(Mockup).where(Mockup.id == mockup_id))
        mockup = result.scalar_one_or_none()
        if not mockup:
            raise NotFound("Mockup not found")
        return mockup

    async def archive(
        self,
        mockup_id: str,
        version_number: int,
        content: Any,
        comments: List[Dict[str, Any]],
    ) -> VersionSnapshot:
        """Insert one immutable snapshot. Runs inside the caller's transaction."""
        snapshot = VersionSnapshot(
            mockup_id=mockup_id,
            version_number=version_number,
            content=content,
            comment_snapshot=comments,
        )
        self.db.add(snapshot)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise VersionConflict(
                f"Version {version_number} of mockup {mockup_id} was already archived"
            ) from e
        return snapshot

    async def get_snapshot(self, mockup_id: str, version_number: int) -> VersionSnapshot:
        result = await self.db.execute(
            select(VersionSnapshot).where(
                VersionSnapshot.mockup_id == mockup_id,
                VersionSnapshot.version_number == version_number,
            )
        )
        snapshot = result.scalar_one_or_none()
        if not snapshot:
            raise NotFound(f"Version {version_number} not found")
        return snapshot

    async def list_versions(
        self, mockup_id: str, order: Literal["asc", "desc"] = "desc"
    ) -> List[VersionListItem]:
        mockup = await self._get_mockup(mockup_id)
        direction = desc if order == "desc" else asc
        result = await self.db.execute(
            select(VersionSnapshot.id, VersionSnapshot.version_number, VersionSnapshot.created_at)
            .where(VersionSnapshot.mockup_id == mockup_id)
            .order_by(direction(VersionSnapshot.version_number))
        )
        archived = [
            VersionListItem(id=row.id, version_number=row.version_number, created_at=row.created_at)
            for row in result.all()
        ]
        current = VersionListItem(
            version_number=mockup.current_version,
            created_at=mockup.updated_at,
            is_current=True,
        )
        if order == "desc":
            return [current] + archived
        return archived + [current]

    async def delete_version(self, mockup_id: str, version_number: int) -> None:
        async with transactional(self.db):
            mockup = await self._get_mockup(mockup_id)
            if version_number >= mockup.current_version:
                raise CannotDeleteCurrentVersion(version_number, mockup.current_version)

            result = await self.db.execute(
                delete(VersionSnapshot).where(
                    VersionSnapshot.mockup_id == mockup_id,
                    VersionSnapshot.version_number == version_number,
                )
            )
            if result.rowcount == 0:
                raise NotFound(f"Version {version_number} not found")

        logger.info(f"Deleted version {version_number} of mockup {mockup_id}")
