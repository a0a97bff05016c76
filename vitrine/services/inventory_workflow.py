"""Admin workflows that write through the repositories.

``AdminWorkspace`` keeps the last confirmed copy of the product and sales
lists. A workflow only touches that copy after its write went through, so the
copy never runs ahead of the store. Store failures are logged and turned into
an error :class:`Notification`; they never escape to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from vitrine.core.currency import parse_amount
from vitrine.core.exceptions import StoreError, ValidationError
from vitrine.repositories.product_repository import ProductRepository
from vitrine.repositories.sales_repository import SalesRepository
from vitrine.schemas.product import Product
from vitrine.schemas.sale import Sale
from vitrine.services.blob_storage import BlobStorage

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"

MSG_OUT_OF_STOCK = "Produto sem estoque!"
MSG_SALE_REGISTERED = "Venda registrada com sucesso!"
MSG_SALE_ERROR = "Erro ao registrar venda."
MSG_STOCK_UPDATED = "Estoque atualizado."
MSG_STOCK_ERROR = "Erro ao atualizar estoque."
MSG_SHOWCASE_ADDED = "Produto adicionado à vitrine!"
MSG_SHOWCASE_REMOVED = "Produto removido da vitrine."
MSG_SHOWCASE_ERROR = "Erro ao atualizar status da vitrine."
MSG_DELETED = "Produto excluído com sucesso!"
MSG_DELETE_ERROR = "Erro ao excluir produto."
MSG_CREATED = "Produto adicionado com sucesso!"
MSG_UPDATED = "Produto atualizado com sucesso!"
MSG_SAVE_ERROR = "Erro ao salvar produto."
MSG_MISSING_FIELDS = "Informe o nome e o preço do produto."
MSG_INVALID_IMAGE = "Imagem inválida."


@dataclass(frozen=True)
class Notification:
    kind: str
    message: str

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls(SUCCESS, message)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls(ERROR, message)

    @property
    def ok(self) -> bool:
        return self.kind == SUCCESS

    def as_dict(self) -> dict:
        return {"type": self.kind, "message": self.message}


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    data: bytes


class AdminWorkspace:
    def __init__(
        self,
        product_repository: ProductRepository,
        sales_repository: SalesRepository,
        blob_storage: Optional[BlobStorage] = None,
        *,
        products: Iterable[Product] = (),
        sales: Iterable[Sale] = (),
    ):
        self.product_repository = product_repository
        self.sales_repository = sales_repository
        self.blob_storage = blob_storage
        self.products: list[Product] = list(products)
        self.sales: list[Sale] = list(sales)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def refresh_products(self) -> list[Product]:
        self.products = self.product_repository.list_all("name")
        return self.products

    def refresh_sales(self) -> list[Sale]:
        self.sales = self.sales_repository.list_all()
        return self.sales

    def load(self) -> None:
        self.refresh_products()
        self.refresh_sales()

    def find(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def _apply_local(self, product_id: str, **changes) -> None:
        self.products = [
            product.model_copy(update=changes) if product.id == product_id else product
            for product in self.products
        ]

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------
    def adjust_stock(self, product: Product, delta: int) -> Notification:
        new_stock = max(0, (product.stock or 0) + int(delta))
        try:
            self.product_repository.update(product.id, {"stock": new_stock})
        except StoreError:
            logger.exception("Stock update failed for product %s", product.id)
            return Notification.error(MSG_STOCK_ERROR)

        self._apply_local(product.id, stock=new_stock)
        logger.info("Stock for product %s set to %d (delta %+d)", product.id, new_stock, int(delta))
        return Notification.success(MSG_STOCK_UPDATED)

    def register_sale(self, product: Product) -> Notification:
        if not product.stock or product.stock <= 0:
            return Notification.error(MSG_OUT_OF_STOCK)

        quantity = 1
        decrement = self.adjust_stock(product, -quantity)
        if not decrement.ok:
            return Notification.error(MSG_SALE_ERROR)

        total_price = parse_amount(product.price) * quantity
        try:
            sale_id = self.sales_repository.append(
                {
                    "product_id": product.id,
                    "product_name": product.name,
                    "quantity": quantity,
                    "total_price": total_price,
                }
            )
        except (StoreError, ValidationError):
            # Stock stays decremented: there is no compensating write.
            logger.warning(
                "Sale for product %s not recorded after stock decrement; stock and ledger now disagree",
                product.id,
                exc_info=True,
            )
            return Notification.error(MSG_SALE_ERROR)

        logger.info("Sale %s registered for product %s (%.2f)", sale_id, product.id, total_price)
        try:
            self.refresh_sales()
        except StoreError:
            logger.exception("Sales list refresh failed after sale %s", sale_id)
        return Notification.success(MSG_SALE_REGISTERED)

    def toggle_showcase(self, product: Product) -> Notification:
        new_value = not product.in_showcase
        try:
            self.product_repository.update(product.id, {"in_showcase": new_value})
        except StoreError:
            logger.exception("Showcase toggle failed for product %s", product.id)
            return Notification.error(MSG_SHOWCASE_ERROR)

        self._apply_local(product.id, in_showcase=new_value)
        return Notification.success(MSG_SHOWCASE_ADDED if new_value else MSG_SHOWCASE_REMOVED)

    def delete_product(self, product_id: str) -> Notification:
        try:
            self.product_repository.delete(product_id)
        except StoreError:
            logger.exception("Delete failed for product %s", product_id)
            return Notification.error(MSG_DELETE_ERROR)

        logger.info("Product %s deleted", product_id)
        try:
            self.refresh_products()
        except StoreError:
            logger.exception("Product list refresh failed after deleting %s", product_id)
            self.products = [product for product in self.products if product.id != product_id]
        return Notification.success(MSG_DELETED)

    def create_or_update_product(
        self,
        fields: Mapping,
        existing_id: Optional[str] = None,
        upload: Optional[ImageUpload] = None,
    ) -> Notification:
        name = str(fields.get("name") or "").strip()
        price = str(fields.get("price") or "").strip()
        if not name or not price:
            return Notification.error(MSG_MISSING_FIELDS)

        image = fields.get("image")
        if upload is not None:
            if self.blob_storage is None:
                logger.error("Image upload requested but no blob storage is configured")
                return Notification.error(MSG_SAVE_ERROR)
            try:
                image = self.blob_storage.upload(upload.filename, upload.data)
            except ValidationError as exc:
                logger.info("Rejected product image %r: %s", upload.filename, exc)
                return Notification.error(MSG_INVALID_IMAGE)
            except StoreError:
                logger.exception("Image upload failed; product not saved")
                return Notification.error(MSG_SAVE_ERROR)

        payload = {"name": name, "price": price}
        if image is not None:
            payload["image"] = str(image)

        try:
            if existing_id:
                self.product_repository.update(existing_id, payload)
                message = MSG_UPDATED
            else:
                payload.setdefault("image", "")
                payload["in_showcase"] = False
                existing_id = self.product_repository.create(payload)
                message = MSG_CREATED
        except ValidationError as exc:
            logger.info("Product form rejected: %s", exc)
            return Notification.error(MSG_MISSING_FIELDS)
        except StoreError:
            logger.exception("Saving product %s failed", existing_id or "<new>")
            return Notification.error(MSG_SAVE_ERROR)

        logger.info("Product %s saved", existing_id)
        try:
            self.refresh_products()
        except StoreError:
            logger.exception("Product list refresh failed after saving %s", existing_id)
        return Notification.success(message)


__all__ = [
    "AdminWorkspace",
    "ERROR",
    "ImageUpload",
    "Notification",
    "SUCCESS",
]
