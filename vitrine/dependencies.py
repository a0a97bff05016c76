from fastapi import Depends
from sqlalchemy.orm import Session

from vitrine.database.session import get_db
from vitrine.repositories.product_repository import ProductRepository
from vitrine.repositories.sales_repository import SalesRepository
from vitrine.services.blob_storage import BlobStorage, get_blob_storage
from vitrine.services.inventory_workflow import AdminWorkspace


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def get_sales_repository(db: Session = Depends(get_db)) -> SalesRepository:
    return SalesRepository(db)


def get_workspace(
    products: ProductRepository = Depends(get_product_repository),
    sales: SalesRepository = Depends(get_sales_repository),
    blob_storage: BlobStorage = Depends(get_blob_storage),
) -> AdminWorkspace:
    return AdminWorkspace(products, sales, blob_storage)


__all__ = [
    "get_blob_storage",
    "get_db",
    "get_product_repository",
    "get_sales_repository",
    "get_workspace",
]
