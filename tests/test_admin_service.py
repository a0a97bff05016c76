import unittest
from datetime import datetime, timezone

from vitrine.services.admin_service import (
    IN_STOCK,
    LOW_STOCK,
    OUT_OF_STOCK,
    AdminViewState,
    build_admin_view,
    compute_stats,
    filter_products,
    stock_status,
)
from tests.support import product, sale


class AdminViewStateTest(unittest.TestCase):
    def test_unknown_values_fall_back_to_defaults(self):
        state = AdminViewState.from_query(search="  anel ", tab="bogus", sort="price")
        self.assertEqual(state, AdminViewState(search="anel", tab="catalog", sort="name"))

    def test_as_query_omits_empty_search(self):
        self.assertEqual(AdminViewState(tab="sales").as_query(), {"tab": "sales", "sort": "name"})


class FilterProductsTest(unittest.TestCase):
    def test_search_is_case_insensitive_and_keeps_order(self):
        products = [
            product("1", "Anel Solitário"),
            product("2", "Colar"),
            product("3", "Brinco Anel"),
        ]
        result = filter_products(products, AdminViewState(search="anel", tab="sales"))
        self.assertEqual([item.name for item in result], ["Anel Solitário", "Brinco Anel"])

    def test_empty_search_matches_everything(self):
        products = [product("1", "Anel"), product("2", "Colar")]
        result = filter_products(products, AdminViewState(tab="sales"))
        self.assertEqual(len(result), 2)

    def test_catalog_tab_only_shows_showcased(self):
        products = [
            product("1", "Anel", in_showcase=True),
            product("2", "Colar", in_showcase=False),
        ]
        result = filter_products(products, AdminViewState(tab="catalog"))
        self.assertEqual([item.id for item in result], ["1"])

    def test_inventory_stock_sorts(self):
        products = [
            product("a", "A", stock=5),
            product("b", "B", stock=0),
            product("c", "C", stock=3),
        ]
        ascending = filter_products(products, AdminViewState(tab="inventory", sort="stock_asc"))
        descending = filter_products(products, AdminViewState(tab="inventory", sort="stock_desc"))
        self.assertEqual([item.stock for item in ascending], [0, 3, 5])
        self.assertEqual([item.stock for item in descending], [5, 3, 0])

    def test_absent_stock_sorts_as_zero(self):
        products = [product("a", "A", stock=2), product("b", "B", stock=None)]
        result = filter_products(products, AdminViewState(tab="inventory", sort="stock_asc"))
        self.assertEqual([item.id for item in result], ["b", "a"])

    def test_inventory_name_sort_ignores_case_and_accents(self):
        products = [product("1", "Órbita"), product("2", "anel"), product("3", "Brinco")]
        result = filter_products(products, AdminViewState(tab="inventory", sort="name"))
        self.assertEqual([item.name for item in result], ["anel", "Brinco", "Órbita"])

    def test_sort_not_applied_outside_inventory(self):
        products = [product("a", "A", stock=5), product("b", "B", stock=0)]
        result = filter_products(products, AdminViewState(tab="sales", sort="stock_asc"))
        self.assertEqual([item.id for item in result], ["a", "b"])

    def test_does_not_mutate_input(self):
        products = [product("a", "A", stock=5), product("b", "B", stock=0)]
        filter_products(products, AdminViewState(tab="inventory", sort="stock_asc"))
        self.assertEqual([item.id for item in products], ["a", "b"])


class StatsTest(unittest.TestCase):
    def test_inventory_value_and_stock(self):
        products = [
            product("1", price="R$ 10,00", stock=2),
            product("2", price="R$ 5,50", stock=1),
        ]
        stats = compute_stats(products, [])
        self.assertEqual(stats.total_products, 2)
        self.assertEqual(stats.total_stock, 3)
        self.assertEqual(stats.total_inventory_value, "R$ 25,50")
        self.assertEqual(stats.total_revenue, "R$ 0,00")

    def test_unparseable_price_and_absent_stock_count_as_zero(self):
        products = [
            product("1", price="consulte", stock=4),
            product("2", price="R$ 7,00", stock=None),
        ]
        stats = compute_stats(products, [])
        self.assertEqual(stats.total_stock, 4)
        self.assertEqual(stats.inventory_value, 0.0)

    def test_revenue_sums_sales(self):
        stats = compute_stats([], [sale("s1", total_price=10.0), sale("s2", total_price=1234.5)])
        self.assertEqual(stats.total_revenue, "R$ 1.244,50")


class StockStatusTest(unittest.TestCase):
    def test_thresholds(self):
        self.assertEqual(stock_status(None), OUT_OF_STOCK)
        self.assertEqual(stock_status(0), OUT_OF_STOCK)
        self.assertEqual(stock_status(1), LOW_STOCK)
        self.assertEqual(stock_status(2), LOW_STOCK)
        self.assertEqual(stock_status(3), IN_STOCK)


class BuildAdminViewTest(unittest.TestCase):
    def test_aggregates_ignore_search_and_tab(self):
        products = [
            product("1", "Anel", price="R$ 10,00", stock=2, in_showcase=True),
            product("2", "Colar", price="R$ 5,50", stock=1),
        ]
        view = build_admin_view(products, [sale()], AdminViewState(search="anel", tab="catalog"))

        self.assertEqual(view["product_count"], 1)
        self.assertEqual(view["stats"]["total_products"], 2)
        self.assertEqual(view["stats"]["total_stock"], 3)
        self.assertEqual(view["stats"]["total_inventory_value"], "R$ 25,50")
        self.assertNotIn("stock_status", view["products"][0])

    def test_inventory_rows_carry_status(self):
        products = [product("1", "Anel", price="R$ 10,00", stock=2)]
        view = build_admin_view(products, [], AdminViewState(tab="inventory"))

        row = view["products"][0]
        self.assertEqual(row["stock_status"], LOW_STOCK)
        self.assertEqual(row["stock_status_label"], "Baixo Estoque")
        self.assertEqual(row["stock_value"], "R$ 20,00")

    def test_sales_rows_are_formatted(self):
        view = build_admin_view([], [sale(total_price=89.9)], AdminViewState(tab="sales"))
        self.assertEqual(view["sales"][0]["total_price_display"], "R$ 89,90")

    def test_sale_dates_are_shown_in_store_time(self):
        sales = [
            sale("s1", date=datetime(2024, 5, 1, 15, 30, tzinfo=timezone.utc)),
            sale("s2", date=datetime(2024, 5, 1, 2, 0)),
        ]
        view = build_admin_view([], sales, AdminViewState(tab="sales"), "America/Campo_Grande")

        self.assertEqual(view["sales"][0]["date_display"], "01/05/2024 11:30")
        self.assertEqual(view["sales"][1]["date_display"], "30/04/2024 22:00")


if __name__ == "__main__":
    unittest.main()
