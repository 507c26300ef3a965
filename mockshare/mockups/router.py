from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from mockshare.database import get_db
from mockshare.auth.dependencies import get_current_designer, get_optional_designer
from mockshare.mockups.dependencies import requested_version
from mockshare.mockups.schemas import (
    MockupCreate,
    MockupCreated,
    MockupRead,
    MockupSummary,
    MockupUpdate,
)
from mockshare.mockups.service import MockupService

router = APIRouter(prefix="/mockups", tags=["mockups"])


@router.get("", response_model=List[MockupSummary])
async def list_mockups(
    designer: str = Depends(get_current_designer),
    db: AsyncSession = Depends(get_db),
):
    service = MockupService(db)
    return await service.list_mockups()


@router.post("", response_model=MockupCreated, status_code=status.HTTP_201_CREATED)
async def create_mockup(
    mockup: MockupCreate,
    designer: str = Depends(get_current_designer),
    db: AsyncSession = Depends(get_db),
):
    service = MockupService(db)
    created = await service.create_mockup(mockup)
    return {"id": created.id}


@router.get("/{mockup_id}", response_model=MockupRead)
async def read_mockup(
    mockup_id: str,
    password: Optional[str] = Query(None),
    version: Optional[int] = Depends(requested_version),
    designer: Optional[str] = Depends(get_optional_designer),
    db: AsyncSession = Depends(get_db),
):
    """
    Viewer endpoint. Counts a view on every successful read.
    """
    service = MockupService(db)
    return await service.read_mockup(
        mockup_id, password=password, version=version, is_designer=designer is not None
    )


@router.put("/{mockup_id}", response_model=MockupSummary)
async def update_mockup(
    mockup_id: str,
    mockup: MockupUpdate,
    designer: str = Depends(get_current_designer),
    db: AsyncSession = Depends(get_db),
):
    service = MockupService(db)
    return await service.update_mockup(mockup_id, mockup)


@router.delete("/{mockup_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mockup(
    mockup_id: str,
    designer: str = Depends(get_current_designer),
    db: AsyncSession = Depends(get_db),
):
    service = MockupService(db)
    await service.delete_mockup(mockup_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
