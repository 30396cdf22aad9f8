"""
Cross-company access rules, exercised end to end over HTTP.

Company 7 is the manager's own restaurant, company 9 belongs to someone else.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from painel.main import app
from painel.models import Order
from painel.repositories.product_repository import ProductRepository
from tests.conftest import COMPANY_A_ID, COMPANY_B_ID


@pytest.fixture
def order_b(db_session, companies):
    order = Order(
        tenant_id=COMPANY_B_ID,
        customer_phone="5511900000009",
        items=[{"name": "Cheeseburger", "quantity": 1, "price": 29.9}],
        subtotal=29.9,
        total=29.9,
    )
    db_session.add(order)
    db_session.commit()
    db_session.refresh(order)
    return order


class TestManagerConfinedToOwnCompany:
    def test_read_foreign_product_forbidden(self, client, manager_a_headers, product_b):
        response = client.get(f"/api/products/{product_b.id}", headers=manager_a_headers)

        assert response.status_code == 403

    def test_read_own_product(self, client, manager_a_headers, product_a):
        response = client.get(f"/api/products/{product_a.id}", headers=manager_a_headers)

        assert response.status_code == 200
        assert response.json()["tenant_id"] == COMPANY_A_ID

    @pytest.mark.parametrize(
        "method,path_template,body",
        [
            ("put", "/api/products/{id}", {"price": 1}),
            ("patch", "/api/products/{id}/toggle", None),
            ("delete", "/api/products/{id}", None),
        ],
    )
    def test_mutate_foreign_product_forbidden(
        self, client, db_session, manager_a_headers, product_b, method, path_template, body
    ):
        url = path_template.format(id=product_b.id)
        kwargs = {"headers": manager_a_headers}
        if body is not None:
            kwargs["json"] = body

        response = getattr(client, method)(url, **kwargs)

        assert response.status_code == 403
        db_session.refresh(product_b)
        assert float(product_b.price) == 29.9
        assert product_b.available is True

    def test_foreign_category_forbidden(self, client, manager_a_headers, category_b):
        assert client.get(f"/api/categories/{category_b.id}", headers=manager_a_headers).status_code == 403
        assert client.put(
            f"/api/categories/{category_b.id}", headers=manager_a_headers, json={"name": "Mine"}
        ).status_code == 403
        assert client.delete(f"/api/categories/{category_b.id}", headers=manager_a_headers).status_code == 403

    def test_foreign_order_forbidden(self, client, manager_a_headers, order_b):
        assert client.get(f"/api/orders/{order_b.id}", headers=manager_a_headers).status_code == 403
        assert client.patch(
            f"/api/orders/{order_b.id}/status", headers=manager_a_headers, json={"status": "cancelled"}
        ).status_code == 403
        assert client.patch(f"/api/orders/{order_b.id}/print", headers=manager_a_headers).status_code == 403

    def test_list_never_leaks(self, client, manager_a_headers, product_a, product_b, order_b):
        products = client.get(
            "/api/products", headers=manager_a_headers, params={"empresa_id": COMPANY_B_ID}
        ).json()["products"]
        orders = client.get(
            "/api/orders", headers=manager_a_headers, params={"empresa_id": COMPANY_B_ID}
        ).json()["orders"]

        assert {p["tenant_id"] for p in products} == {COMPANY_A_ID}
        assert orders == []


class TestAdminScope:
    def test_admin_reads_any_company(self, client, admin_headers, product_b, order_b):
        assert client.get(f"/api/products/{product_b.id}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/orders/{order_b.id}", headers=admin_headers).status_code == 200

    def test_admin_lists_with_empresa_id(self, client, admin_headers, order_b):
        response = client.get(
            "/api/orders", headers=admin_headers, params={"empresa_id": COMPANY_B_ID}
        )

        assert response.status_code == 200
        assert [o["id"] for o in response.json()["orders"]] == [order_b.id]

    @pytest.mark.parametrize(
        "path", ["/api/products", "/api/categories", "/api/orders", "/api/conversations"]
    )
    def test_admin_list_requires_empresa_id(self, client, admin_headers, path):
        response = client.get(path, headers=admin_headers)

        assert response.status_code == 400
        assert "empresa_id" in response.json()["detail"]

    def test_empresa_id_must_be_positive(self, client, admin_headers):
        response = client.get("/api/products", headers=admin_headers, params={"empresa_id": 0})
        assert response.status_code == 422


class TestNotFoundBeforeForbidden:
    """Missing IDs are 404 for everyone; existing foreign IDs are 403"""

    @pytest.mark.parametrize(
        "path", ["/api/products/999", "/api/categories/999", "/api/orders/999"]
    )
    def test_missing_is_404_for_manager(self, client, manager_a_headers, path):
        assert client.get(path, headers=manager_a_headers).status_code == 404

    @pytest.mark.parametrize(
        "path", ["/api/products/999", "/api/categories/999", "/api/orders/999"]
    )
    def test_missing_is_404_for_admin(self, client, admin_headers, path):
        assert client.get(path, headers=admin_headers).status_code == 404

    def test_existing_foreign_is_403_not_404(self, client, manager_a_headers, product_b):
        """Existence of another company's IDs is observable; this is accepted"""
        foreign = client.get(f"/api/products/{product_b.id}", headers=manager_a_headers)
        missing = client.get(f"/api/products/{product_b.id + 100}", headers=manager_a_headers)

        assert foreign.status_code == 403
        assert missing.status_code == 404


class TestStoreFailure:
    def test_database_error_is_generic_500(self, client, manager_a_headers, monkeypatch):
        def broken(self, tenant_id):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr(ProductRepository, "get_by_tenant", broken)

        response = client.get("/api/products", headers=manager_a_headers)

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "connection refused" not in response.text

    def test_unexpected_error_is_generic_json_500(self, client, manager_a_headers, monkeypatch):
        def broken(self, tenant_id):
            raise RuntimeError("menu cache exploded")

        monkeypatch.setattr(ProductRepository, "get_by_tenant", broken)
        # Shares the get_db override installed by the client fixture
        lenient_client = TestClient(app, raise_server_exceptions=False)

        response = lenient_client.get("/api/products", headers=manager_a_headers)

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"detail": "Internal server error"}
        assert "exploded" not in response.text
