from painel.models import Category, Product
from tests.conftest import COMPANY_A_ID, COMPANY_B_ID


class TestCategoryList:
    def test_list_own_company_ordered_by_position(self, client, db_session, manager_a_headers, category_a):
        db_session.add(Category(tenant_id=COMPANY_A_ID, name="Drinks", position=0))
        db_session.commit()

        response = client.get("/api/categories", headers=manager_a_headers)

        assert response.status_code == 200
        names = [c["name"] for c in response.json()["categories"]]
        assert names == ["Drinks", "Pizzas"]
        assert response.json()["total"] == 2

    def test_list_excludes_other_company(self, client, manager_a_headers, category_a, category_b):
        response = client.get("/api/categories", headers=manager_a_headers)

        assert [c["id"] for c in response.json()["categories"]] == [category_a.id]

    def test_manager_empresa_id_ignored(self, client, manager_a_headers, category_a, category_b):
        """A manager passing another company's id still gets their own menu"""
        response = client.get(
            "/api/categories", headers=manager_a_headers, params={"empresa_id": COMPANY_B_ID}
        )

        assert response.status_code == 200
        assert [c["tenant_id"] for c in response.json()["categories"]] == [COMPANY_A_ID]


class TestCategoryCreate:
    def test_manager_creates_in_own_company(self, client, manager_a_headers):
        response = client.post(
            "/api/categories",
            headers=manager_a_headers,
            json={"name": "Desserts", "description": "Sweet", "position": 3},
        )

        assert response.status_code == 201
        category = response.json()
        assert category["tenant_id"] == COMPANY_A_ID
        assert category["name"] == "Desserts"
        assert category["position"] == 3
        assert category["active"] is True

    def test_manager_cannot_create_elsewhere(self, client, manager_a_headers):
        """empresa_id from a manager is ignored; the category lands in their company"""
        response = client.post(
            "/api/categories",
            headers=manager_a_headers,
            json={"name": "Desserts", "empresa_id": COMPANY_B_ID},
        )

        assert response.status_code == 201
        assert response.json()["tenant_id"] == COMPANY_A_ID

    def test_admin_creates_with_empresa_id(self, client, admin_headers):
        response = client.post(
            "/api/categories",
            headers=admin_headers,
            json={"name": "Sides", "empresa_id": COMPANY_B_ID},
        )

        assert response.status_code == 201
        assert response.json()["tenant_id"] == COMPANY_B_ID

    def test_admin_must_pass_empresa_id(self, client, admin_headers):
        response = client.post("/api/categories", headers=admin_headers, json={"name": "Sides"})

        assert response.status_code == 400
        assert "empresa_id" in response.json()["detail"]

    def test_admin_unknown_company(self, client, admin_headers):
        response = client.post(
            "/api/categories", headers=admin_headers, json={"name": "Sides", "empresa_id": 404}
        )

        assert response.status_code == 404

    def test_missing_name(self, client, manager_a_headers):
        response = client.post("/api/categories", headers=manager_a_headers, json={})
        assert response.status_code == 422


class TestCategoryUpdateDelete:
    def test_partial_update(self, client, manager_a_headers, category_a):
        response = client.put(
            f"/api/categories/{category_a.id}",
            headers=manager_a_headers,
            json={"position": 5},
        )

        assert response.status_code == 200
        assert response.json()["position"] == 5
        assert response.json()["name"] == "Pizzas"

    def test_deactivate(self, client, manager_a_headers, category_a):
        response = client.put(
            f"/api/categories/{category_a.id}",
            headers=manager_a_headers,
            json={"active": False},
        )

        assert response.json()["active"] is False

    def test_delete_empty_category(self, client, db_session, manager_a_headers, category_a):
        response = client.delete(f"/api/categories/{category_a.id}", headers=manager_a_headers)

        assert response.status_code == 204
        assert db_session.get(Category, category_a.id) is None

    def test_delete_with_products_rejected(self, client, db_session, manager_a_headers, product_a):
        response = client.delete(
            f"/api/categories/{product_a.category_id}", headers=manager_a_headers
        )

        assert response.status_code == 400
        assert "products" in response.json()["detail"]
        assert db_session.get(Product, product_a.id) is not None

    def test_delete_missing(self, client, manager_a_headers):
        response = client.delete("/api/categories/999", headers=manager_a_headers)
        assert response.status_code == 404
