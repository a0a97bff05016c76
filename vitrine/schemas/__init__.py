from vitrine.schemas.cart import CartItem, HandoffRequest, HandoffResponse
from vitrine.schemas.product import Product, ProductCreate, ProductUpdate
from vitrine.schemas.sale import Sale, SaleCreate

__all__ = [
    "CartItem",
    "HandoffRequest",
    "HandoffResponse",
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "Sale",
    "SaleCreate",
]
