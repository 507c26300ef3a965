from typing import List, Literal
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from mockshare.database import get_db
from mockshare.auth.dependencies import get_current_designer
from mockshare.mockups.dependencies import require_viewer_access
from mockshare.mockups.models import Mockup
from mockshare.versions.coordinator import VersioningCoordinator
from mockshare.versions.schemas import (
    VersionCutResponse,
    VersionListItem,
    VersionSnapshotResponse,
)
from mockshare.versions.service import VersionArchive

router = APIRouter(prefix="/mockups", tags=["versions"])


@router.post(
    "/{mockup_id}/versions",
    response_model=VersionCutResponse,
    status_code=status.HTTP_201_CREATED,
)
async def cut_version(
    mockup_id: str,
    designer: str = Depends(get_current_designer),
    db: AsyncSession = Depends(get_db),
):
    """
    Archive the current version and continue editing a copy of it as the next version.
    """
    coordinator = VersioningCoordinator(db)
    return await coordinator.cut_version(mockup_id)


@router.get("/{mockup_id}/versions", response_model=List[VersionListItem])
async def list_versions(
    mockup_id: str,
    order: Literal["asc", "desc"] = Query("desc"),
    mockup: Mockup = Depends(require_viewer_access),
    db: AsyncSession = Depends(get_db),
):
    archive = VersionArchive(db)
    return await archive.list_versions(mockup_id, order)


@router.get("/{mockup_id}/versions/{version_number}", response_model=VersionSnapshotResponse)
async def get_version(
    mockup_id: str,
    version_number: int = Path(..., ge=1),
    mockup: Mockup = Depends(require_viewer_access),
    db: AsyncSession = Depends(get_db),
):
    archive = VersionArchive(db)
    return await archive.get_snapshot(mockup_id, version_number)


@router.delete("/{mockup_id}/versions/{version_number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_version(
    mockup_id: str,
    version_number: int = Path(..., ge=1),
    designer: str = Depends(get_current_designer),
    db: AsyncSession = Depends(get_db),
):
    archive = VersionArchive(db)
    await archive.delete_version(mockup_id, version_number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
