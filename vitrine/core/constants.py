from pathlib import Path


PACKAGE_DIR = Path(__file__).resolve().parents[1]
PROJECT_ROOT = PACKAGE_DIR.parent

TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

ADMIN_PATH = "/admin"
LOGIN_PATH = "/admin/login"

ADMIN_TABS = ("catalog", "inventory", "sales")
SORT_MODES = ("name", "stock_asc", "stock_desc")
DEFAULT_TAB = "catalog"
DEFAULT_SORT = "name"

# Products with fewer units than this (but more than zero) are flagged as low stock.
LOW_STOCK_THRESHOLD = 3
STORE_TIMEZONE = "America/Campo_Grande"
SALE_DATE_FORMAT = "%d/%m/%Y %H:%M"

PRODUCT_ORDER_FIELDS = ("name", "created_at", "stock", "price")
BLOB_NAMESPACE = "products"
