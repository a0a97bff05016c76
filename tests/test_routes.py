import asyncio
import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from vitrine.config import get_settings
from vitrine.database.session import get_db
from vitrine.main import app
from vitrine.repositories.product_repository import ProductRepository
from vitrine.repositories.sales_repository import SalesRepository
from vitrine.services.blob_storage import BlobStorage, get_blob_storage
from vitrine.services.inventory_workflow import AdminWorkspace
from tests.support import make_session

ADMIN_ENV = {
    "ADMIN_EMAIL": "dona@lspratas.com",
    "ADMIN_PASSWORD": "prata925",
    "ADMIN_PASSWORD_HASH": "",
    "WHATSAPP_NUMBER": "5567991116421",
    "WHATSAPP_BASE_URL": "https://wa.me",
}


class RoutesTestCase(unittest.TestCase):
    def setUp(self):
        env_patcher = patch.dict(os.environ, ADMIN_ENV, clear=False)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)
        get_settings.cache_clear()
        self.addCleanup(get_settings.cache_clear)

        self.db = make_session()
        self.addCleanup(self.db.close)
        self.media = tempfile.TemporaryDirectory()
        self.addCleanup(self.media.cleanup)

        def override_get_db():
            yield self.db

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_blob_storage] = lambda: BlobStorage(self.media.name, "/media")
        self.addCleanup(app.dependency_overrides.clear)

        self.client = TestClient(app, follow_redirects=False)
        self.products = ProductRepository(self.db)
        self.sales = SalesRepository(self.db)

    def login(self):
        response = self.client.post(
            "/admin/login",
            data={"email": "dona@lspratas.com", "password": "prata925"},
        )
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/admin")


class PublicRoutesTest(RoutesTestCase):
    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["status"], "ok")
        self.assertEqual(payload["database"], "ok")
        self.assertEqual(payload["store"], "L.S. PRATAS")

    def test_health_reports_unreachable_store(self):
        broken = MagicMock()
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("database is locked"))

        def broken_db():
            yield broken

        app.dependency_overrides[get_db] = broken_db
        with self.assertLogs("vitrine.routers.health", level="ERROR"):
            response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["database"], "unavailable")

    def test_checkout_button_stays_hidden_for_empty_bag(self):
        self.assertIn("hidden", self.client.get("/").text.split('id="cart-checkout"')[1].split(">")[0])
        css = self.client.get("/static/styles.css").text
        self.assertIn(".cart-checkout[hidden] { display: none; }", css)

    def test_catalog_api_only_lists_showcased(self):
        visible = self.products.create({"name": "Anel", "price": "R$ 10,00", "in_showcase": True})
        self.products.create({"name": "Colar", "price": "R$ 20,00"})

        response = self.client.get("/api/catalog")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["id"] for item in response.json()], [visible])

    def test_home_page_renders_catalog(self):
        self.products.create({"name": "Brinco Gota", "price": "R$ 45,00", "in_showcase": True})
        self.products.create({"name": "Colar Oculto", "price": "R$ 20,00"})

        response = self.client.get("/")

        self.assertEqual(response.status_code, 200)
        self.assertIn("Brinco Gota", response.text)
        self.assertNotIn("Colar Oculto", response.text)
        self.assertIn("(67) 99111-6421", response.text)

    def test_home_page_with_empty_catalog(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("Nenhuma joia disponível", response.text)

    def test_cart_handoff(self):
        response = self.client.post(
            "/api/cart/handoff",
            json={"items": [{"id": "1", "name": "Anel", "price": "R$ 10,00"}]},
        )

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["count"], 1)
        self.assertIn("- Anel (R$ 10,00)", payload["message"])
        self.assertTrue(payload["url"].startswith("https://wa.me/5567991116421?text="))

    def test_cart_handoff_rejects_empty_cart(self):
        response = self.client.post("/api/cart/handoff", json={"items": []})
        self.assertEqual(response.status_code, 400)


class AuthRoutesTest(RoutesTestCase):
    def test_admin_requires_login(self):
        response = self.client.get("/admin")
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/admin/login")

    def test_admin_api_requires_login(self):
        self.assertEqual(self.client.get("/admin/api/overview").status_code, 401)

    def test_invalid_credentials_show_generic_message(self):
        response = self.client.post(
            "/admin/login",
            data={"email": "dona@lspratas.com", "password": "errada"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertIn("Credenciais inválidas. Tente novamente.", response.text)

    def test_login_then_logout(self):
        self.login()
        self.assertEqual(self.client.get("/admin").status_code, 200)

        response = self.client.post("/admin/logout")
        self.assertEqual(response.headers["location"], "/admin/login")
        self.assertEqual(self.client.get("/admin").status_code, 303)


class AdminRoutesTest(RoutesTestCase):
    def setUp(self):
        super().setUp()
        self.login()

    def test_overview_json(self):
        self.products.create({"name": "Anel", "price": "R$ 10,00", "stock": 2})
        self.products.create({"name": "Colar", "price": "R$ 5,50", "stock": 1})

        response = self.client.get("/admin/api/overview", params={"tab": "inventory", "sort": "stock_asc"})

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["stats"]["total_stock"], 3)
        self.assertEqual(payload["stats"]["total_inventory_value"], "R$ 25,50")
        self.assertEqual([row["name"] for row in payload["products"]], ["Colar", "Anel"])

    def test_price_preview(self):
        response = self.client.get("/admin/api/price-preview", params={"digits": "8990"})
        self.assertEqual(response.json(), {"price": "R$ 89,90"})

    def test_price_field_is_formatted_in_the_browser(self):
        page = self.client.get("/admin", params={"edit": "new"}).text
        self.assertIn('class="js-price"', page)
        self.assertNotIn("data-preview-url", page)

        script = self.client.get("/static/admin.js").text
        self.assertIn("function formatFromDigits", script)
        self.assertNotIn("fetch(", script)

    def test_product_save_runs_off_the_event_loop(self):
        seen = {}
        original = AdminWorkspace.create_or_update_product

        def recording(workspace, *args, **kwargs):
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                seen["on_loop"] = False
            else:
                seen["on_loop"] = True
            return original(workspace, *args, **kwargs)

        with patch.object(AdminWorkspace, "create_or_update_product", recording):
            response = self.client.post(
                "/admin/products",
                data={"name": "Anel", "price": "R$ 10,00"},
                files={"image": ("anel.jpg", b"jpeg-bytes", "image/jpeg")},
            )

        self.assertEqual(response.status_code, 303)
        self.assertIs(seen["on_loop"], False)
        self.assertEqual(len(self.products.list_all()), 1)

    def test_oversized_upload_is_rejected_before_saving(self):
        with patch.dict(os.environ, {"MAX_UPLOAD_BYTES": "8"}):
            get_settings.cache_clear()
            with patch.object(AdminWorkspace, "create_or_update_product") as save:
                response = self.client.post(
                    "/admin/products",
                    data={"name": "Anel", "price": "R$ 10,00", "tab": "inventory"},
                    files={"image": ("anel.jpg", b"123456789", "image/jpeg")},
                )

        self.assertEqual(response.status_code, 303)
        self.assertTrue(response.headers["location"].startswith("/admin?tab=inventory"))
        save.assert_not_called()
        self.assertEqual(self.products.list_all(), [])
        self.assertIn("Imagem inválida.", self.client.get("/admin").text)

    def test_upload_at_the_size_limit_is_accepted(self):
        with patch.dict(os.environ, {"MAX_UPLOAD_BYTES": "8"}):
            get_settings.cache_clear()
            self.client.post(
                "/admin/products",
                data={"name": "Anel", "price": "R$ 10,00"},
                files={"image": ("anel.jpg", b"12345678", "image/jpeg")},
            )

        created = self.products.list_all()
        self.assertEqual(len(created), 1)
        self.assertTrue(created[0].image.endswith("_anel.jpg"))

    def test_register_sale_flow(self):
        product_id = self.products.create({"name": "Anel", "price": "R$ 10,00", "stock": 1})

        response = self.client.post(
            "/admin/products/{}/sale".format(product_id),
            data={"tab": "inventory", "q": "", "sort": "name"},
        )

        self.assertEqual(response.status_code, 303)
        self.assertTrue(response.headers["location"].startswith("/admin?tab=inventory"))
        self.assertEqual(self.products.get(product_id).stock, 0)
        self.assertEqual(len(self.sales.list_all()), 1)

        page = self.client.get(response.headers["location"])
        self.assertIn("Venda registrada com sucesso!", page.text)
        self.assertNotIn("Venda registrada com sucesso!", self.client.get("/admin").text)

    def test_sale_without_stock_is_refused(self):
        product_id = self.products.create({"name": "Anel", "price": "R$ 10,00", "stock": 0})

        self.client.post("/admin/products/{}/sale".format(product_id))

        self.assertEqual(self.sales.list_all(), [])
        self.assertIn("Produto sem estoque!", self.client.get("/admin").text)

    def test_stock_buttons(self):
        product_id = self.products.create({"name": "Anel", "price": "R$ 10,00", "stock": 1})

        self.client.post("/admin/products/{}/stock".format(product_id), data={"delta": "1"})
        self.assertEqual(self.products.get(product_id).stock, 2)

        for _ in range(3):
            self.client.post("/admin/products/{}/stock".format(product_id), data={"delta": "-1"})
        self.assertEqual(self.products.get(product_id).stock, 0)

    def test_showcase_toggle(self):
        product_id = self.products.create({"name": "Anel", "price": "R$ 10,00"})

        self.client.post("/admin/products/{}/showcase".format(product_id))

        self.assertTrue(self.products.get(product_id).in_showcase)
        self.assertEqual([item["id"] for item in self.client.get("/api/catalog").json()], [product_id])

    def test_unknown_product_action(self):
        self.client.post("/admin/products/missing/showcase")
        self.assertIn("Produto não encontrado.", self.client.get("/admin").text)

    def test_create_product_with_image(self):
        response = self.client.post(
            "/admin/products",
            data={"name": "Colar Ponto de Luz", "price": "R$ 119,90"},
            files={"image": ("colar.jpg", b"jpeg-bytes", "image/jpeg")},
        )

        self.assertEqual(response.status_code, 303)
        created = self.products.list_all()
        self.assertEqual(len(created), 1)
        self.assertTrue(created[0].image.startswith("/media/products/"))
        self.assertTrue(created[0].image.endswith("_colar.jpg"))
        self.assertFalse(created[0].in_showcase)

    def test_edit_product_keeps_stock(self):
        product_id = self.products.create({"name": "Anel", "price": "R$ 10,00", "stock": 4})

        self.client.post(
            "/admin/products",
            data={"name": "Anel Duplo", "price": "R$ 12,00", "product_id": product_id},
        )

        updated = self.products.get(product_id)
        self.assertEqual(updated.name, "Anel Duplo")
        self.assertEqual(updated.stock, 4)

    def test_delete_is_two_step(self):
        product_id = self.products.create({"name": "Anel", "price": "R$ 10,00"})

        confirm = self.client.get("/admin/products/{}/delete".format(product_id))
        self.assertEqual(confirm.status_code, 200)
        self.assertIn("Essa ação não pode ser desfeita", confirm.text)
        self.assertEqual(len(self.products.list_all()), 1)

        self.client.post("/admin/products/{}/delete".format(product_id))
        self.assertEqual(self.products.list_all(), [])


if __name__ == "__main__":
    unittest.main()
