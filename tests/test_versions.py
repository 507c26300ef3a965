import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from mockshare.database import transactional
from mockshare.errors import CannotDeleteCurrentVersion, NotFound, VersionConflict
from mockshare.mockups.schemas import MockupCreate, MockupUpdate
from mockshare.mockups.service import MockupService
from mockshare.versions.coordinator import VersioningCoordinator
from mockshare.versions.service import VersionArchive


async def create_mockup(db: AsyncSession, content: dict) -> str:
    mockup = await MockupService(db).create_mockup(MockupCreate(content=content))
    return mockup.id


@pytest.mark.asyncio
@pytest.mark.parametrize("cuts", [0, 1, 4])
async def test_current_version_after_n_cuts(db_session: AsyncSession, cuts: int):
    mockup_id = await create_mockup(db_session, {"title": "Widget"})
    coordinator = VersioningCoordinator(db_session)

    for _ in range(cuts):
        await coordinator.cut_version(mockup_id)

    mockup = await MockupService(db_session).get_mockup(mockup_id)
    assert mockup.current_version == 1 + cuts
    versions = await VersionArchive(db_session).list_versions(mockup_id)
    assert len(versions) == cuts + 1


@pytest.mark.asyncio
async def test_cut_archives_the_outgoing_version(db_session: AsyncSession, product_content: dict):
    mockup_id = await create_mockup(db_session, product_content)

    cut = await VersioningCoordinator(db_session).cut_version(mockup_id)
    assert cut.previous_version == 1
    assert cut.new_version == 2

    snapshot = await VersionArchive(db_session).get_snapshot(mockup_id, 1)
    assert snapshot.id == cut.snapshot_id
    assert snapshot.content == product_content
    assert snapshot.comment_snapshot == []

    # Content is carried forward unchanged
    mockup = await MockupService(db_session).get_mockup(mockup_id)
    assert mockup.content == product_content


@pytest.mark.asyncio
async def test_snapshot_unaffected_by_later_edits(db_session: AsyncSession):
    mockup_id = await create_mockup(db_session, {"title": "Widget", "bullets": ["one"]})
    await VersioningCoordinator(db_session).cut_version(mockup_id)

    await MockupService(db_session).update_mockup(
        mockup_id, MockupUpdate(content={"title": "Gadget", "bullets": ["one", "two"]})
    )

    snapshot = await VersionArchive(db_session).get_snapshot(mockup_id, 1)
    assert snapshot.content == {"title": "Widget", "bullets": ["one"]}


@pytest.mark.asyncio
async def test_cut_unknown_mockup(db_session: AsyncSession):
    with pytest.raises(NotFound):
        await VersioningCoordinator(db_session).cut_version("nope")


@pytest.mark.asyncio
async def test_list_versions_marks_current(db_session: AsyncSession):
    mockup_id = await create_mockup(db_session, {"title": "Widget"})
    coordinator = VersioningCoordinator(db_session)
    await coordinator.cut_version(mockup_id)
    await coordinator.cut_version(mockup_id)
    archive = VersionArchive(db_session)

    newest_first = await archive.list_versions(mockup_id, "desc")
    assert [v.version_number for v in newest_first] == [3, 2, 1]
    assert [v.is_current for v in newest_first] == [True, False, False]
    assert newest_first[0].id is None
    assert all(v.id for v in newest_first[1:])

    oldest_first = await archive.list_versions(mockup_id, "asc")
    assert [v.version_number for v in oldest_first] == [1, 2, 3]
    assert oldest_first[-1].is_current


@pytest.mark.asyncio
async def test_delete_current_version_is_rejected(db_session: AsyncSession):
    mockup_id = await create_mockup(db_session, {"title": "Widget"})
    await VersioningCoordinator(db_session).cut_version(mockup_id)
    archive = VersionArchive(db_session)

    with pytest.raises(CannotDeleteCurrentVersion):
        await archive.delete_version(mockup_id, 2)
    with pytest.raises(CannotDeleteCurrentVersion):
        await archive.delete_version(mockup_id, 3)


@pytest.mark.asyncio
async def test_delete_archived_version(db_session: AsyncSession):
    mockup_id = await create_mockup(db_session, {"title": "Widget"})
    coordinator = VersioningCoordinator(db_session)
    await coordinator.cut_version(mockup_id)
    await coordinator.cut_version(mockup_id)
    archive = VersionArchive(db_session)

    await archive.delete_version(mockup_id, 1)

    versions = await archive.list_versions(mockup_id, "asc")
    assert [v.version_number for v in versions] == [2, 3]
    with pytest.raises(NotFound):
        await archive.get_snapshot(mockup_id, 1)
    with pytest.raises(NotFound):
        await archive.delete_version(mockup_id, 1)

    # Version numbers are never reused
    cut = await coordinator.cut_version(mockup_id)
    assert cut.new_version == 4


@pytest.mark.asyncio
async def test_duplicate_archive_rolls_back(db_session: AsyncSession):
    mockup_id = await create_mockup(db_session, {"title": "Widget"})
    archive = VersionArchive(db_session)

    with pytest.raises(VersionConflict):
        async with transactional(db_session):
            await archive.archive(mockup_id, 1, {"title": "Widget"}, [])
            await archive.archive(mockup_id, 1, {"title": "Widget"}, [])

    with pytest.raises(NotFound):
        await archive.get_snapshot(mockup_id, 1)
