import logging
from typing import List, Literal, Optional

from sqlalchemy import select, update, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from mockshare.auth.security import check_password_gate, get_password_hash
from mockshare.comments.models import Comment
from mockshare.database import transactional
from mockshare.errors import InvalidPassword, NotFound
from mockshare.mockups.models import Mockup
from mockshare.mockups.schemas import MockupCreate, MockupRead, MockupUpdate
from mockshare.versions.models import VersionSnapshot
from mockshare.versions.service import VersionArchive

logger = logging.getLogger(__name__)


class MockupService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_mockup(
        self, mockup_id: str, lock: Optional[Literal["share", "update"]] = None
    ) -> Mockup:
        """Fetch a mockup, optionally taking a row lock for the rest of the transaction.

        ``share`` lets comment writes run side by side while keeping a version
        cut (which takes ``update``) out until they commit.
        """
        query = select(Mockup).where(Mockup.id == mockup_id)
        if lock == "update":
            query = query.with_for_update().execution_options(populate_existing=True)
        elif lock == "share":
            query = query.with_for_update(read=True).execution_options(populate_existing=True)
        result = await self.db.execute(query)
        mockup = result.scalar_one_or_none()
        if not mockup:
            raise NotFound("Mockup not found")
        return mockup

    async def authorize_viewer(
        self, mockup_id: str, password: Optional[str] = None, is_designer: bool = False
    ) -> Mockup:
        """Apply the password gate without counting a view."""
        mockup = await self.get_mockup(mockup_id)
        if is_designer:
            return mockup
        try:
            check_password_gate(mockup.password_hash, password)
        except InvalidPassword:
            logger.warning(f"Invalid password attempt for mockup {mockup_id}")
            raise
        return mockup

    async def list_mockups(self) -> List[Mockup]:
        result = await self.db.execute(select(Mockup).order_by(desc(Mockup.updated_at)))
        return list(result.scalars().all())

    async def create_mockup(self, mockup_in: MockupCreate) -> Mockup:
        mockup = Mockup(
            content=mockup_in.content,
            password_hash=get_password_hash(mockup_in.password) if mockup_in.password else None,
            view_count=0,
            current_version=1,
        )
        async with transactional(self.db):
            self.db.add(mockup)
        await self.db.refresh(mockup)
        logger.info(f"Created mockup {mockup.id} (password protected: {mockup.password_protected})")
        return mockup

    async def read_mockup(
        self,
        mockup_id: str,
        password: Optional[str] = None,
        version: Optional[int] = None,
        is_designer: bool = False,
    ) -> MockupRead:
        """
        Resolve the content a viewer asked for and count the view.

        ``version`` None means the live version. Any successful read counts,
        whichever version it resolves to.
        """
        async with transactional(self.db):
            mockup = await self.authorize_viewer(mockup_id, password, is_designer)

            if version is None or version == mockup.current_version:
                content = mockup.content
                viewing_version = mockup.current_version
            else:
                if version > mockup.current_version:
                    raise NotFound(f"Version {version} not found")
                snapshot = await VersionArchive(self.db).get_snapshot(mockup_id, version)
                content = snapshot.content
                viewing_version = snapshot.version_number

            # Keep updated_at untouched: views are not edits
            result = await self.db.execute(
                update(Mockup)
                .where(Mockup.id == mockup_id)
                .values(view_count=Mockup.view_count + 1, updated_at=Mockup.updated_at)
                .returning(Mockup.view_count)
                .execution_options(synchronize_session=False)
            )
            view_count = result.scalar_one()
            set_committed_value(mockup, "view_count", view_count)

        return MockupRead(
            id=mockup.id,
            content=content,
            view_count=view_count,
            current_version=mockup.current_version,
            viewing_version=viewing_version,
            is_current_version=viewing_version == mockup.current_version,
        )

    async def update_mockup(self, mockup_id: str, mockup_in: MockupUpdate) -> Mockup:
        """Replace live content in place. The version counter is left alone."""
        async with transactional(self.db):
            mockup = await self.get_mockup(mockup_id)
            mockup.content = mockup_in.content
            if mockup_in.password:
                mockup.password_hash = get_password_hash(mockup_in.password)
            elif mockup_in.remove_password:
                mockup.password_hash = None
        await self.db.refresh(mockup)
        return mockup

    async def delete_mockup(self, mockup_id: str) -> None:
        """Delete a mockup with all of its comments and archived versions."""
        async with transactional(self.db):
            mockup = await self.get_mockup(mockup_id, lock="update")
            await self.db.execute(delete(Comment).where(Comment.mockup_id == mockup_id))
            await self.db.execute(
                delete(VersionSnapshot).where(VersionSnapshot.mockup_id == mockup_id)
            )
            await self.db.delete(mockup)
        logger.info(f"Deleted mockup {mockup_id}")
