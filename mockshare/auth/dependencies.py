from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from mockshare.auth import security

bearer_scheme = HTTPBearer(auto_error=False)


def _designer_from_credentials(
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if credentials is None:
        return None
    try:
        payload = security.decode_access_token(credentials.credentials)
    except JWTError:
        return None
    return payload.get("sub")


async def get_current_designer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Require a valid designer bearer token and return its subject."""
    designer = _designer_from_credentials(credentials)
    if designer is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return designer


async def get_optional_designer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Designer subject for public endpoints, None for anonymous viewers.

    An invalid token is treated as anonymous rather than rejected, so a
    stale designer session still sees the viewer experience.
    """
    return _designer_from_credentials(credentials)
