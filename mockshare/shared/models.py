from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, String
from mockshare.shared.ids import new_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

class ShortIdMixin:
    id = Column(String(32), primary_key=True, default=new_id)

class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class AuditMixin(ShortIdMixin, TimestampMixin):
    """Combines short ids and timestamps for standard entities."""
    pass
