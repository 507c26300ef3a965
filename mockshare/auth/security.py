from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt
from passlib.context import CryptContext

from mockshare.config import settings
from mockshare.errors import InvalidPassword, PasswordRequired

ALGORITHM = settings.ALGORITHM

# pbkdf2_sha256 is implemented by passlib itself, no native backend needed
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def check_password_gate(password_hash: Optional[str], password: Optional[str]) -> None:
    """Raise unless the caller may read a mockup guarded by ``password_hash``.

    A missing hash means the mockup is public and the supplied password is
    ignored.
    """
    if not password_hash:
        return
    if not password:
        raise PasswordRequired()
    if not verify_password(password, password_hash):
        raise InvalidPassword()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
