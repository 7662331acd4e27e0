# tests/test_client_cache.py
import json

import pytest
from sqlalchemy.exc import OperationalError

from app.client.admin_data import AdminData
from app.client.local_store import LocalStore, load_seed
from app.client.resource_cache import LoadSource, SyncState
from app.routers import products as products_router

PRODUCT = {
    "name": "Katarni Rice",
    "description": "Fragrant short grain",
    "price": "Rs. 2,800 / 25kg",
    "category": "surayadaya-premium-rice",
    "subcategory": "katarni",
    "inStock": True,
}


class TestLoad:
    def test_load_from_api_refreshes_mirror(self, admin, client):
        client.post("/api/products", json=PRODUCT)
        assert admin.products.load() is LoadSource.API
        assert [p["name"] for p in admin.products.records] == ["Katarni Rice"]
        assert admin.store.get("products") == admin.products.records

    def test_outage_uses_local_mirror(self, offline_admin):
        mirrored = [{"id": "65a1b2c3d4e5f60718293a4b", **PRODUCT}]
        offline_admin.store.set("products", mirrored)
        assert offline_admin.products.load() is LoadSource.LOCAL
        assert offline_admin.products.records == mirrored

    def test_outage_without_mirror_uses_seed(self, offline_admin):
        """Seed data is written to the mirror so later reads agree"""
        assert offline_admin.notices.load() is LoadSource.SEED
        seed = load_seed("notices")
        assert offline_admin.notices.records == seed
        assert offline_admin.store.get("notices") == seed

    def test_api_error_falls_back(self, admin, client, monkeypatch):
        """A non-success API answer is treated like an outage"""
        def broken_list(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

        monkeypatch.setattr(products_router.service, "list", broken_list)
        assert admin.products.load() is LoadSource.SEED

    def test_corrupt_mirror_is_ignored(self, offline_admin):
        path = offline_admin.store.directory / "documents.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{not json", encoding="utf-8")
        assert offline_admin.documents.load() is LoadSource.SEED

    def test_second_offline_load_is_stable(self, offline_admin):
        """Loading again during an outage gives the same records"""
        assert offline_admin.products.load() is LoadSource.SEED
        first = offline_admin.products.records

        assert offline_admin.products.load() is LoadSource.LOCAL
        assert offline_admin.products.records == first

    def test_offline_record_survives_api_load(self, offline_admin, admin, client):
        """A record created during an outage stays out of sync after reconnecting"""
        client.post("/api/products", json={**PRODUCT, "name": "Server Rice"})
        pending = offline_admin.products.save(PRODUCT)
        local_id = pending["localId"]

        assert admin.products.load() is LoadSource.API

        assert admin.products.get(local_id)["name"] == "Katarni Rice"
        assert admin.products.sync_state(local_id) is SyncState.FAILED
        mirrored = {p.get("id") or p["localId"] for p in admin.store.get("products")}
        assert local_id in mirrored
        assert len(mirrored) == 2

    def test_seed_records_dropped_after_api_load(self, offline_admin, admin):
        offline_admin.products.load()
        assert admin.products.load() is LoadSource.API
        assert admin.products.records == []
        assert admin.store.get("products") == []

    def test_load_all(self, admin):
        sources = admin.load_all()
        assert set(sources) == set(admin.caches)
        assert all(source is LoadSource.API for source in sources.values())


class TestSave:
    def test_create_confirms_and_broadcasts_once(self, admin, client):
        events = []
        admin.subscribe("products", events.append)

        saved = admin.products.save(PRODUCT)

        assert len(saved["id"]) == 24
        assert admin.products.sync_state(saved["id"]) is SyncState.CONFIRMED
        assert [e.action for e in events] == ["created"]
        assert events[0].record_id.startswith("local-")
        assert client.get("/api/products").json()["products"][0]["id"] == saved["id"]
        assert admin.store.get("products") == [saved]

    def test_listener_sees_optimistic_record(self, admin):
        """Listeners re-read the collection before the API answers"""
        seen = []

        def on_change(event):
            seen.append((admin.products.get(event.record_id), admin.products.sync_state(event.record_id)))

        admin.subscribe("products", on_change)
        admin.products.save(PRODUCT)

        record, state = seen[0]
        assert record["name"] == "Katarni Rice"
        assert state is SyncState.PENDING

    def test_save_with_id_updates_in_place(self, admin, client):
        """Editing an existing record never creates a second one"""
        saved = admin.products.save(PRODUCT)
        updated = admin.products.save({**saved, "price": "Rs. 3,000 / 25kg"})

        assert updated["id"] == saved["id"]
        assert updated["version"] == 2
        products = client.get("/api/products").json()["products"]
        assert len(products) == 1
        assert products[0]["price"] == "Rs. 3,000 / 25kg"
        assert len(admin.products.records) == 1

    def test_failed_sync_is_marked(self, offline_admin):
        events = []
        offline_admin.subscribe("products", events.append)

        saved = offline_admin.products.save(PRODUCT)

        key = saved["localId"]
        assert "id" not in saved
        assert offline_admin.products.sync_state(key) is SyncState.FAILED
        assert offline_admin.products.get(key)["name"] == "Katarni Rice"
        assert offline_admin.store.get("products") == [saved]
        assert len(events) == 1

    def test_retry_after_outage_keeps_single_record(self, offline_admin, admin, client):
        """A failed create retried online replaces the local copy"""
        pending = offline_admin.products.save(PRODUCT)
        admin.products.load()

        confirmed = admin.products.save(pending)

        assert admin.products.get(pending["localId"]) is None
        assert [p["id"] for p in admin.products.records] == [confirmed["id"]]
        assert len(client.get("/api/products").json()["products"]) == 1

    def test_rejected_payload_is_marked_failed(self, admin):
        saved = admin.products.save({**PRODUCT, "category": "bhus"})
        assert admin.products.sync_state(saved["localId"]) is SyncState.FAILED

    def test_concurrent_edit_conflict(self, admin, client, tmp_path):
        """The second editor with a stale version is marked failed"""
        other = AdminData(http=client, cache_dir=tmp_path / "other")
        saved = admin.products.save(PRODUCT)
        other.products.load()

        admin.products.save({**saved, "name": "First"})
        stale = other.products.save({**other.products.get(saved["id"]), "name": "Second"})

        assert other.products.sync_state(stale["id"]) is SyncState.FAILED
        assert client.get("/api/products").json()["products"][0]["name"] == "First"

    def test_results_after_close_are_ignored(self, admin):
        admin.close()

        stored = admin.notices.save({"title": "Late", "content": "After close"})

        assert "id" in stored
        local = admin.notices.records
        assert len(local) == 1
        assert "id" not in local[0]
        assert admin.notices.sync_state(stored["id"]) is None


class TestRemove:
    def test_remove_stored_record(self, admin, client):
        events = []
        saved = admin.products.save(PRODUCT)
        admin.subscribe("products", events.append)

        assert admin.products.remove(saved["id"]) is True
        assert admin.products.records == []
        assert client.get("/api/products").json()["products"] == []
        assert [(e.action, e.record_id) for e in events] == [("deleted", saved["id"])]

    def test_remove_already_deleted(self, admin, client):
        saved = admin.products.save(PRODUCT)
        client.delete(f"/api/products?id={saved['id']}")

        assert admin.products.remove(saved["id"]) is False
        assert admin.products.records == []

    def test_remove_during_outage_marks_failed(self, offline_admin):
        offline_admin.store.set("products", [{"id": "65a1b2c3d4e5f60718293a4b", **PRODUCT}])
        offline_admin.products.load()

        assert offline_admin.products.remove("65a1b2c3d4e5f60718293a4b") is False
        assert offline_admin.products.records == []
        assert offline_admin.products.sync_state("65a1b2c3d4e5f60718293a4b") is SyncState.FAILED

    def test_remove_local_only_record(self, offline_admin, offline_calls):
        saved = offline_admin.products.save(PRODUCT)
        attempts = len(offline_calls)

        assert offline_admin.products.remove(saved["localId"]) is True
        assert offline_admin.products.records == []
        assert len(offline_calls) == attempts


class TestActivityLog:
    def test_local_log_is_capped_newest_first(self, offline_admin):
        offline_admin.activity_limit = 3
        for i in range(5):
            offline_admin.log_activity("login", "Auth", str(i))

        assert [e["details"] for e in offline_admin.activity_logs] == ["4", "3", "2"]

    def test_log_is_sent_to_api(self, admin, client):
        admin.log_activity("export", "Products", "CSV export")
        entry = client.get("/api/activity-logs").json()["activityLogs"][0]
        assert (entry["action"], entry["details"]) == ("export", "CSV export")

    def test_log_never_raises_offline(self, offline_admin):
        entry = offline_admin.log_activity("login", "Auth")
        assert entry["user"] == "Admin"


class TestDerivedViews:
    def test_active_notices(self, offline_admin):
        offline_admin.store.set(
            "notices",
            [
                {"title": "Default", "content": "x"},
                {"title": "Explicit", "content": "x", "isActive": True},
                {"title": "Hidden", "content": "x", "isActive": False},
            ],
        )
        offline_admin.notices.load()
        assert [n["title"] for n in offline_admin.active_notices()] == ["Default", "Explicit"]

    def test_popup_notices(self, offline_admin):
        """Only active notices flagged as popups"""
        offline_admin.store.set(
            "notices",
            [
                {"title": "Popup", "content": "x", "showAsPopup": True},
                {"title": "Hidden popup", "content": "x", "showAsPopup": True, "isActive": False},
                {"title": "Plain", "content": "x"},
            ],
        )
        offline_admin.notices.load()
        assert [n["title"] for n in offline_admin.popup_notices()] == ["Popup"]

    def test_in_stock_products_from_seed(self, offline_admin):
        offline_admin.products.load()
        names = [p["name"] for p in offline_admin.in_stock_products()]
        assert "Rice Bhus" not in names
        assert len(names) == 3


class TestLocalStore:
    def test_unknown_key(self, tmp_path):
        store = LocalStore(tmp_path)
        with pytest.raises(KeyError):
            store.get("orders")

    def test_non_list_is_ignored(self, tmp_path):
        (tmp_path / "products.json").write_text(json.dumps({"a": 1}), encoding="utf-8")
        assert LocalStore(tmp_path).get("products") is None


class TestAdminData:
    def test_cache_by_kind(self, offline_admin):
        assert offline_admin.cache("carousel").endpoint.path == "/carousel"
        assert offline_admin.cache("products") is offline_admin.products

    def test_unknown_kind(self, offline_admin):
        with pytest.raises(KeyError, match="Unknown resource kind: orders"):
            offline_admin.cache("orders")

    def test_close_releases_own_http_client(self, tmp_path):
        data = AdminData(cache_dir=tmp_path / "cache")
        data.close()
        assert data.api.http.is_closed

    def test_close_leaves_injected_client_open(self, client, tmp_path):
        data = AdminData(http=client, cache_dir=tmp_path / "cache")
        data.close()
        assert not client.is_closed
