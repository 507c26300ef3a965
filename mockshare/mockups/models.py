from sqlalchemy import Column, String, Integer, JSON
from mockshare.database import Base
from mockshare.shared.models import AuditMixin


class Mockup(Base, AuditMixin):
    __tablename__ = "mockups"

    # Product page document (brand, title, price, bullets, images...), never inspected here
    content = Column(JSON(none_as_null=True), nullable=False)
    password_hash = Column(String, nullable=True)
    view_count = Column(Integer, default=0, nullable=False)
    current_version = Column(Integer, default=1, nullable=False)

    @property
    def password_protected(self) -> bool:
        return self.password_hash is not None
