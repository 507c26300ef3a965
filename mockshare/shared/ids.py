import secrets

from mockshare.config import settings


def new_id() -> str:
    """Short opaque id for mockups, comments and version records."""
    return secrets.token_hex(settings.ID_BYTES)
