from typing import Mapping, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from vitrine.core.constants import PRODUCT_ORDER_FIELDS
from vitrine.core.exceptions import DocumentNotFound
from vitrine.models.product import ProductDocument
from vitrine.repositories.base import store_errors, to_record, validate_fields
from vitrine.schemas.product import Product, ProductCreate, ProductUpdate

COLLECTION = "products"


class ProductRepository:
    """CRUD over the ``products`` collection returning typed ``Product`` records."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self, stmt) -> list[Product]:
        with store_errors(self.db, "list products"):
            rows = self.db.execute(stmt).scalars().all()
        return [to_record(Product, row, COLLECTION) for row in rows]

    def _load(self, product_id: str, action: str) -> ProductDocument:
        with store_errors(self.db, action):
            document = self.db.get(ProductDocument, product_id)
        if document is None:
            raise DocumentNotFound(COLLECTION, product_id)
        return document

    def list_all(self, order_by: str = "name", descending: bool = False) -> list[Product]:
        if order_by not in PRODUCT_ORDER_FIELDS:
            raise ValueError("Unsupported order field: {}".format(order_by))
        column = getattr(ProductDocument, order_by)
        ordering = column.desc() if descending else column.asc()
        return self._query(select(ProductDocument).order_by(ordering, ProductDocument.id))

    def list_showcased(self) -> list[Product]:
        # Insertion order, no explicit sort.
        return self._query(
            select(ProductDocument)
            .where(ProductDocument.in_showcase.is_(True))
            .order_by(ProductDocument.created_at, ProductDocument.id)
        )

    def get(self, product_id: str) -> Product:
        return to_record(Product, self._load(product_id, "get product"), COLLECTION)

    def create(self, fields: Union[ProductCreate, Mapping]) -> str:
        payload = validate_fields(ProductCreate, fields)
        document = ProductDocument(**payload.model_dump())
        with store_errors(self.db, "create product"):
            self.db.add(document)
            self.db.commit()
        return document.id

    def update(self, product_id: str, fields: Union[ProductUpdate, Mapping]) -> None:
        changes = validate_fields(ProductUpdate, fields).model_dump(exclude_unset=True)
        document = self._load(product_id, "update product")
        with store_errors(self.db, "update product"):
            for key, value in changes.items():
                setattr(document, key, value)
            self.db.commit()

    def delete(self, product_id: str) -> None:
        document = self._load(product_id, "delete product")
        with store_errors(self.db, "delete product"):
            self.db.delete(document)
            self.db.commit()


__all__ = ["ProductRepository"]
