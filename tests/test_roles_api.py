"""Roles HTTP endpoints."""

from fastapi.testclient import TestClient

from backoffice.db.session import get_db
from backoffice.main import app
from backoffice.models.audit_log import AuditLog
from backoffice.models.role import Role
from backoffice.services.audit_service import AuditService


def _role_body(name="store manager", permissions=("view_orders", "process_orders")):
    return {
        "name": name,
        "display_name": "Store Manager",
        "description": "Runs a single store",
        "permissions": list(permissions),
        "color": "#0EA5E9",
        "priority": 75,
    }


class TestRolesApi:

    def test_list_sorted_with_user_counts(self, client, admin, make_user, seeded, auth_headers):
        make_user(seeded["roles"]["CASHIER"])

        resp = client.get("/api/roles/", headers=auth_headers(admin))

        body = resp.json()
        assert resp.status_code == 200
        assert body["count"] == 6
        assert [r["name"] for r in body["roles"]] == [
            "SUPER_ADMIN", "ADMIN", "MANAGER", "EMPLOYEE", "CASHIER", "CUSTOMER",
        ]
        counts = {r["name"]: r["user_count"] for r in body["roles"]}
        assert counts["ADMIN"] == 1
        assert counts["CASHIER"] == 1
        assert counts["MANAGER"] == 0

    def test_filter_by_system_flag(self, client, admin, auth_headers):
        headers = auth_headers(admin)
        client.post("/api/roles/", json=_role_body(), headers=headers)

        resp = client.get("/api/roles/", params={"is_system": "false"}, headers=headers)
        assert [r["name"] for r in resp.json()["roles"]] == ["STORE_MANAGER"]

    def test_create_returns_created_role(self, client, db, admin, auth_headers):
        resp = client.post("/api/roles/", json=_role_body(), headers=auth_headers(admin))

        assert resp.status_code == 201
        role = resp.json()["role"]
        assert role["name"] == "STORE_MANAGER"
        assert role["permissions"] == ["view_orders", "process_orders"]
        assert role["created_by"] == admin.id
        assert role["user_count"] == 0

        entry = db.query(AuditLog).filter(AuditLog.action == "role.created").one()
        assert entry.actor_id == admin.id
        assert entry.resource_id == str(role["id"])

    def test_create_with_unknown_permission_creates_nothing(
        self, client, db, admin, auth_headers,
    ):
        resp = client.post(
            "/api/roles/",
            json=_role_body(permissions=["view_orders", "launch_rockets"]),
            headers=auth_headers(admin),
        )

        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "message": "Some permissions are invalid: launch_rockets",
        }
        assert db.query(Role).count() == 6

    def test_update_and_get(self, client, admin, auth_headers):
        headers = auth_headers(admin)
        role_id = client.post("/api/roles/", json=_role_body(), headers=headers).json()["role"]["id"]

        resp = client.put(
            f"/api/roles/{role_id}",
            json={"permissions": ["view_products"], "is_active": False},
            headers=headers,
        )
        assert resp.status_code == 200

        role = client.get(f"/api/roles/{role_id}", headers=headers).json()["role"]
        assert role["permissions"] == ["view_products"]
        assert role["is_active"] is False
        assert role["priority"] == 75
        assert role["updated_by"] == admin.id

    def test_system_role_rejects_update(self, client, seeded, super_admin, auth_headers):
        role_id = seeded["roles"]["CASHIER"].id
        resp = client.put(
            f"/api/roles/{role_id}", json={"priority": 1}, headers=auth_headers(super_admin),
        )

        assert resp.status_code == 403
        assert resp.json()["message"] == "System roles cannot be modified"

    def test_delete_requires_system_role_permission(self, client, admin, super_admin, auth_headers):
        role_id = client.post(
            "/api/roles/", json=_role_body(), headers=auth_headers(admin),
        ).json()["role"]["id"]

        assert client.delete(f"/api/roles/{role_id}", headers=auth_headers(admin)).status_code == 403

        resp = client.delete(f"/api/roles/{role_id}", headers=auth_headers(super_admin))
        assert resp.status_code == 200
        assert client.get(f"/api/roles/{role_id}", headers=auth_headers(admin)).status_code == 404

    def test_delete_assigned_role_conflicts(
        self, client, db, super_admin, make_user, auth_headers,
    ):
        headers = auth_headers(super_admin)
        role_id = client.post("/api/roles/", json=_role_body(), headers=headers).json()["role"]["id"]
        role = db.get(Role, role_id)
        make_user(role)
        make_user(role)

        resp = client.delete(f"/api/roles/{role_id}", headers=headers)

        assert resp.status_code == 409
        assert resp.json()["message"] == (
            "Cannot delete role. 2 user(s) are assigned to this role."
        )

    def test_role_users_page_excludes_password(
        self, client, seeded, admin, make_user, auth_headers,
    ):
        cashier_role = seeded["roles"]["CASHIER"]
        for _ in range(3):
            make_user(cashier_role)

        resp = client.get(
            f"/api/roles/{cashier_role.id}/users",
            params={"page": 2, "page_size": 2},
            headers=auth_headers(admin),
        )

        body = resp.json()
        assert resp.status_code == 200
        assert body["total"] == 3
        assert body["total_pages"] == 2
        assert body["current_page"] == 2
        assert body["count"] == 1
        assert "hashed_password" not in body["users"][0]
        assert "password" not in body["users"][0]

    def test_seed_on_non_empty_registry_conflicts(self, client, super_admin, auth_headers):
        resp = client.post("/api/roles/seed", headers=auth_headers(super_admin))

        assert resp.status_code == 409
        assert resp.json()["message"] == "Roles already exist. Cannot seed."


def test_unexpected_fault_returns_error_text(db, super_admin, auth_headers):
    def broken_db():
        yield db

    def explode(*args, **kwargs):
        raise RuntimeError("database went away")

    app.dependency_overrides[get_db] = broken_db
    original = db.query
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            headers = auth_headers(super_admin)
            db.query = explode
            resp = c.get("/api/roles/", headers=headers)
    finally:
        db.query = original
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "message": "Server error",
        "error": "database went away",
    }


def test_failed_audit_write_leaves_no_role_behind(db, admin, auth_headers, monkeypatch):
    def shared_db():
        yield db

    def audit_store_down(*args, **kwargs):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(AuditService, "log", staticmethod(audit_store_down))
    app.dependency_overrides[get_db] = shared_db
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            resp = c.post("/api/roles/", json=_role_body(), headers=auth_headers(admin))
    finally:
        app.dependency_overrides.clear()
    # What closing the request session does.
    db.rollback()

    assert resp.status_code == 500
    assert db.query(Role).filter(Role.name == "STORE_MANAGER").count() == 0
    assert db.query(AuditLog).count() == 0


def test_blank_role_name_is_bad_request(client, admin, auth_headers):
    resp = client.post(
        "/api/roles/", json=_role_body(name="   "), headers=auth_headers(admin),
    )

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Role name is required"}
