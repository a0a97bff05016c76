"""Derived state for the admin dashboard.

Everything here is a pure function of the confirmed product and sales lists
plus an :class:`AdminViewState`; nothing reads or writes the store.
"""

import unicodedata
from datetime import timezone
from zoneinfo import ZoneInfo
from dataclasses import asdict, dataclass

from vitrine.core.constants import (
    ADMIN_TABS,
    DEFAULT_SORT,
    DEFAULT_TAB,
    LOW_STOCK_THRESHOLD,
    SALE_DATE_FORMAT,
    SORT_MODES,
    STORE_TIMEZONE,
)
from vitrine.core.currency import format_amount, parse_amount

OUT_OF_STOCK = "out_of_stock"
LOW_STOCK = "low_stock"
IN_STOCK = "in_stock"

STOCK_STATUS_LABELS = {
    OUT_OF_STOCK: "Esgotado",
    LOW_STOCK: "Baixo Estoque",
    IN_STOCK: "Em Estoque",
}


@dataclass(frozen=True)
class AdminViewState:
    search: str = ""
    tab: str = DEFAULT_TAB
    sort: str = DEFAULT_SORT

    @classmethod
    def from_query(cls, search=None, tab=None, sort=None) -> "AdminViewState":
        tab_value = str(tab or "").strip().lower()
        sort_value = str(sort or "").strip().lower()
        return cls(
            search=str(search or "").strip(),
            tab=tab_value if tab_value in ADMIN_TABS else DEFAULT_TAB,
            sort=sort_value if sort_value in SORT_MODES else DEFAULT_SORT,
        )

    def as_query(self) -> dict:
        params = {"tab": self.tab, "sort": self.sort}
        if self.search:
            params["q"] = self.search
        return params


@dataclass(frozen=True)
class DashboardStats:
    total_products: int
    total_stock: int
    inventory_value: float
    revenue: float

    @property
    def total_inventory_value(self) -> str:
        return format_amount(self.inventory_value)

    @property
    def total_revenue(self) -> str:
        return format_amount(self.revenue)

    def as_dict(self) -> dict:
        payload = asdict(self)
        payload["total_inventory_value"] = self.total_inventory_value
        payload["total_revenue"] = self.total_revenue
        return payload


def stock_status(stock) -> str:
    count = stock or 0
    if count <= 0:
        return OUT_OF_STOCK
    if count < LOW_STOCK_THRESHOLD:
        return LOW_STOCK
    return IN_STOCK


def name_collation_key(name: str):
    # Accent- and case-insensitive, close to pt-BR dictionary order.
    decomposed = unicodedata.normalize("NFKD", name or "")
    folded = "".join(char for char in decomposed if not unicodedata.combining(char)).casefold()
    return folded, name or ""


def filter_products(products, state: AdminViewState) -> list:
    term = state.search.casefold()
    result = [product for product in products if term in product.name.casefold()]

    if state.tab == "catalog":
        result = [product for product in result if product.in_showcase is True]

    if state.tab == "inventory":
        if state.sort == "stock_asc":
            result.sort(key=lambda product: product.stock or 0)
        elif state.sort == "stock_desc":
            result.sort(key=lambda product: product.stock or 0, reverse=True)
        else:
            result.sort(key=lambda product: name_collation_key(product.name))

    return result


def compute_stats(products, sales) -> DashboardStats:
    total_stock = 0
    inventory_value = 0.0
    for product in products:
        stock = product.stock or 0
        total_stock += stock
        inventory_value += parse_amount(product.price) * stock

    revenue = sum((sale.total_price for sale in sales), 0.0)

    return DashboardStats(
        total_products=len(products),
        total_stock=total_stock,
        inventory_value=inventory_value,
        revenue=revenue,
    )


def _product_row(product, with_status: bool) -> dict:
    row = product.model_dump()
    if with_status:
        status = stock_status(product.stock)
        row["stock_status"] = status
        row["stock_status_label"] = STOCK_STATUS_LABELS[status]
        row["stock_value"] = format_amount(parse_amount(product.price) * (product.stock or 0))
    return row


def to_store_time(value, timezone_name: str = STORE_TIMEZONE):
    # Naive datetimes come back from SQLite and were written as UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(timezone_name))


def _sale_row(sale, timezone_name: str) -> dict:
    row = sale.model_dump()
    row["total_price_display"] = format_amount(sale.total_price)
    row["date_display"] = to_store_time(sale.date, timezone_name).strftime(SALE_DATE_FORMAT)
    return row


def build_admin_view(products, sales, state: AdminViewState, timezone_name: str = STORE_TIMEZONE) -> dict:
    visible = filter_products(products, state)
    with_status = state.tab == "inventory"
    return {
        "state": asdict(state),
        "stats": compute_stats(products, sales).as_dict(),
        "products": [_product_row(product, with_status) for product in visible],
        "product_count": len(visible),
        "sales": [_sale_row(sale, timezone_name) for sale in sales],
    }


__all__ = [
    "AdminViewState",
    "DashboardStats",
    "IN_STOCK",
    "LOW_STOCK",
    "OUT_OF_STOCK",
    "STOCK_STATUS_LABELS",
    "build_admin_view",
    "compute_stats",
    "filter_products",
    "name_collation_key",
    "stock_status",
    "to_store_time",
]
