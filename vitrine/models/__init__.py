from vitrine.models.product import ProductDocument
from vitrine.models.sale import SaleDocument

__all__ = ["ProductDocument", "SaleDocument"]
