from vitrine.repositories.product_repository import ProductRepository
from vitrine.repositories.sales_repository import SalesRepository

__all__ = ["ProductRepository", "SalesRepository"]
