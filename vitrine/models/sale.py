from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String

from vitrine.database.base import Base
from vitrine.models.product import new_document_id


class SaleDocument(Base):
    __tablename__ = "sales"

    id = Column(String(32), primary_key=True, default=new_document_id)

    # Snapshot of the product at sale time; no foreign key so history
    # survives product edits and deletion.
    product_id = Column(String(32), nullable=False)
    product_name = Column(String, nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    total_price = Column(Float, nullable=False, default=0.0)
    date = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_sales_date", "date"),
    )


__all__ = ["SaleDocument"]
