import logging

from vitrine.repositories.product_repository import ProductRepository
from vitrine.schemas.product import Product

logger = logging.getLogger(__name__)


def showcase_products(products) -> list[Product]:
    return [product for product in products if product.in_showcase is True]


def load_catalog(repository: ProductRepository) -> list[Product]:
    # Hidden products never reach the storefront, whatever the query returned.
    products = showcase_products(repository.list_showcased())
    logger.debug("Catalog loaded with %d showcased products", len(products))
    return products


__all__ = ["load_catalog", "showcase_products"]
