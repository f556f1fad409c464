"""Login and current-user endpoints."""

from backoffice.core.security import decode_token
from backoffice.services.auth_service import auth_service
from conftest import TEST_PASSWORD


class TestLogin:

    def test_login_returns_bearer_token(self, client, admin):
        resp = client.post(
            "/api/auth/login", json={"email": "ADMIN@shop.test", "password": TEST_PASSWORD},
        )

        body = resp.json()
        assert resp.status_code == 200
        assert body["success"] is True
        assert body["token_type"] == "bearer"
        assert body["user"]["role"] == "ADMIN"
        assert decode_token(body["access_token"])["sub"] == str(admin.id)

    def test_wrong_password(self, client, admin):
        resp = client.post(
            "/api/auth/login", json={"email": "admin@shop.test", "password": "wrong-pass"},
        )

        assert resp.status_code == 401
        assert resp.json() == {"success": False, "message": "Invalid email or password"}

    def test_deactivated_account(self, client, seeded, make_user):
        make_user(seeded["roles"]["EMPLOYEE"], email="gone@shop.test", is_active=False)

        resp = client.post(
            "/api/auth/login", json={"email": "gone@shop.test", "password": TEST_PASSWORD},
        )
        assert resp.status_code == 401
        assert resp.json()["message"] == "Account is deactivated"


class TestMe:

    def test_me_lists_role_permissions(self, client, cashier, auth_headers):
        resp = client.get("/api/auth/me", headers=auth_headers(cashier))

        body = resp.json()
        assert resp.status_code == 200
        assert body["role"] == "CASHIER"
        assert body["permissions"] == [
            "access_pos", "process_sales", "view_inventory", "view_products",
        ]
        assert "hashed_password" not in body["user"]

    def test_me_lists_override(self, client, seeded, make_user, auth_headers):
        user = make_user(seeded["roles"]["MANAGER"], custom_permissions=["view_orders"])

        resp = client.get("/api/auth/me", headers=auth_headers(user))

        assert resp.json()["permissions"] == ["view_orders"]
        assert resp.json()["user"]["has_custom_permissions"] is True

    def test_me_requires_token(self, client):
        assert client.get("/api/auth/me").status_code == 401


class TestCreateUser:

    def test_custom_permissions_switch_override_on(self, db, seeded):
        user = auth_service.create_user(
            db, "Clerk@Shop.test", "pw123456", "Clerk", "EMPLOYEE",
            custom_permissions=["view_orders"],
        )

        assert user.email == "clerk@shop.test"
        assert user.has_custom_permissions is True
        assert user.custom_permissions == ["view_orders"]

    def test_plain_user_follows_role(self, db, seeded):
        user = auth_service.create_user(db, "c@shop.test", "pw123456", "Customer")

        assert user.role.name == "CUSTOMER"
        assert user.has_custom_permissions is False
