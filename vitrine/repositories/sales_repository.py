from datetime import datetime, timezone
from typing import Mapping, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from vitrine.models.sale import SaleDocument
from vitrine.repositories.base import store_errors, to_record, validate_fields
from vitrine.schemas.sale import Sale, SaleCreate

COLLECTION = "sales"


class SalesRepository:
    """Append-only access to the ``sales`` ledger."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Sale]:
        stmt = select(SaleDocument).order_by(SaleDocument.date.desc(), SaleDocument.id)
        with store_errors(self.db, "list sales"):
            rows = self.db.execute(stmt).scalars().all()
        return [to_record(Sale, row, COLLECTION) for row in rows]

    def append(self, fields: Union[SaleCreate, Mapping]) -> str:
        payload = validate_fields(SaleCreate, fields).model_dump()
        if payload.get("date") is None:
            payload["date"] = datetime.now(timezone.utc)
        document = SaleDocument(**payload)
        with store_errors(self.db, "append sale"):
            self.db.add(document)
            self.db.commit()
        return document.id


__all__ = ["SalesRepository"]
