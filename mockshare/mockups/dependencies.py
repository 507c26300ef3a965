from typing import Optional

from fastapi import Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mockshare.auth.dependencies import get_optional_designer
from mockshare.database import get_db
from mockshare.mockups.models import Mockup
from mockshare.mockups.service import MockupService


def requested_version(
    version: Optional[str] = Query(None, description='Version number, or "current"'),
) -> Optional[int]:
    """Parse ``?version=``; None stands for the live version."""
    if version is None or version == "" or version == "current":
        return None
    try:
        number = int(version)
    except ValueError:
        raise HTTPException(status_code=422, detail="version must be a number or 'current'")
    if number < 1:
        raise HTTPException(status_code=422, detail="version must be at least 1")
    return number


async def require_viewer_access(
    mockup_id: str,
    password: Optional[str] = Query(None),
    designer: Optional[str] = Depends(get_optional_designer),
    db: AsyncSession = Depends(get_db),
) -> Mockup:
    """Gate public endpoints behind the mockup password.

    The designer always passes. Raises NotFound, PasswordRequired or
    InvalidPassword otherwise.
    """
    service = MockupService(db)
    return await service.authorize_viewer(mockup_id, password, is_designer=designer is not None)
