from vitrine.services.admin_service import AdminViewState, build_admin_view, compute_stats
from vitrine.services.blob_storage import BlobStorage, get_blob_storage
from vitrine.services.cart_service import Cart, build_handoff_link, build_handoff_message
from vitrine.services.catalog_service import load_catalog, showcase_products
from vitrine.services.inventory_workflow import AdminWorkspace, ImageUpload, Notification

__all__ = [
    "AdminViewState",
    "AdminWorkspace",
    "BlobStorage",
    "Cart",
    "ImageUpload",
    "Notification",
    "build_admin_view",
    "build_handoff_link",
    "build_handoff_message",
    "compute_stats",
    "get_blob_storage",
    "load_catalog",
    "showcase_products",
]
