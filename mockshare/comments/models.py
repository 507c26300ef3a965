from sqlalchemy import Column, String, ForeignKey, Integer, Boolean, Float, Text, Index
from mockshare.database import Base
from mockshare.shared.models import AuditMixin


class Comment(Base, AuditMixin):
    __tablename__ = "mockup_comments"

    mockup_id = Column(ForeignKey("mockups.id", ondelete="CASCADE"), nullable=False)
    version_number = Column(Integer, nullable=False)

    # Annotation box over a product image, normalised to 0..1
    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)
    width = Column(Float, nullable=False, default=0.0)
    height = Column(Float, nullable=False, default=0.0)
    image_index = Column(Integer, nullable=False, default=0)

    body = Column(Text, nullable=False)
    author_name = Column(String, nullable=False)
    author_token = Column(String, nullable=False)
    resolved = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index("ix_mockup_comments_mockup_version", "mockup_id", "version_number"),
    )
