"""Site settings singleton."""

from backoffice.models.site_settings import SiteSettings
from backoffice.services.settings_service import settings_service


class TestSiteSettingsService:

    def test_created_once_on_first_access(self, db):
        first = settings_service.get_site_settings(db)
        second = settings_service.get_site_settings(db)

        assert first.id == second.id
        assert first.site_name == "E-Shop"
        assert first.social_links["facebook"] == ""
        assert db.query(SiteSettings).count() == 1

    def test_partial_update_merges_social_links(self, db):
        settings_service.update_site_settings(
            db, {"site_name": "Bazaar", "social_links": {"twitter": "@bazaar"}},
        )
        row = settings_service.update_site_settings(db, {"primary_color": "#000000"})

        assert row.site_name == "Bazaar"
        assert row.primary_color == "#000000"
        assert row.social_links["twitter"] == "@bazaar"
        assert row.social_links["instagram"] == ""


class TestSiteSettingsApi:

    def test_public_read(self, client):
        resp = client.get("/api/settings/site")

        assert resp.status_code == 200
        assert resp.json()["settings"]["secondary_color"] == "#10b981"

    def test_update_requires_permission(self, client, cashier, admin, auth_headers):
        body = {"contact_email": "help@shop.test"}

        assert client.put(
            "/api/settings/site", json=body, headers=auth_headers(cashier),
        ).status_code == 403

        resp = client.put("/api/settings/site", json=body, headers=auth_headers(admin))
        assert resp.status_code == 200
        assert resp.json()["settings"]["contact_email"] == "help@shop.test"
