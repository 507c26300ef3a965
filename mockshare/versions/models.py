from sqlalchemy import Column, ForeignKey, Integer, JSON, UniqueConstraint
from mockshare.database import Base
from mockshare.shared.models import AuditMixin


class VersionSnapshot(Base, AuditMixin):
    """Frozen copy of a mockup at a past version. Rows are never updated."""

    __tablename__ = "mockup_versions"

    mockup_id = Column(ForeignKey("mockups.id", ondelete="CASCADE"), nullable=False, index=True)
    version_number = Column(Integer, nullable=False)

    content = Column(JSON, nullable=False)
    # Public comment fields as they were when the version was cut
    comment_snapshot = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        UniqueConstraint("mockup_id", "version_number", name="uq_mockup_version"),
    )
