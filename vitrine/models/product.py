import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String

from vitrine.database.base import Base


def new_document_id() -> str:
    return uuid.uuid4().hex


class ProductDocument(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=new_document_id)

    name = Column(String, nullable=False)
    price = Column(String, nullable=False, default="")
    image = Column(String, nullable=False, default="")
    stock = Column(Integer)
    in_showcase = Column(Boolean, nullable=False, default=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_products_name", "name"),
        Index("idx_products_showcase", "in_showcase"),
    )


__all__ = ["ProductDocument", "new_document_id"]
