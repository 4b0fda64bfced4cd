import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from estatehub.client.gateway import GatewayError
from estatehub.client.normalize import PLACEHOLDER_IMAGE, normalize_record
from estatehub.client.storage import MemoryStorage
from estatehub.client.store import AppStore, companion_lead_payload


VISIT_DATE = datetime(2026, 11, 2, 10, 30, tzinfo=timezone.utc)


def _server_property(pid: str, **extra) -> dict:
    doc = {
        "_id": pid,
        "title": f"Listing {pid}",
        "city": "Mumbai",
        "price": 1_000_000,
        "area": 1000,
        "images": ["/images/a.jpg"],
        "createdAt": "2026-10-01T00:00:00Z",
    }
    doc.update(extra)
    return doc


def _store(gateway, storage=None, **kwargs) -> AppStore:
    return AppStore(gateway, storage or MemoryStorage(), **kwargs)


class TestLoad:
    @pytest.mark.asyncio
    async def test_properties_are_normalized(self, mock_gateway):
        mock_gateway.get_properties.return_value = [
            _server_property("p1", images=["blob:http://localhost/abc", "/ok.jpg"]),
            _server_property("p2", images=["/src/assets/hero.png"]),
            _server_property("p3", images=[]),
        ]
        store = _store(mock_gateway)
        await store.load()

        assert store.is_loading_properties is False
        assert [p["id"] for p in store.properties] == ["p1", "p2", "p3"]
        assert all("_id" not in p for p in store.properties)
        assert store.properties[0]["images"] == [PLACEHOLDER_IMAGE, "/ok.jpg"]
        assert store.properties[1]["images"] == [PLACEHOLDER_IMAGE]
        assert store.properties[2]["images"] == [PLACEHOLDER_IMAGE]
        assert store.properties[0]["createdAt"] == datetime(
            2026, 10, 1, tzinfo=timezone.utc
        )

    @pytest.mark.asyncio
    async def test_fetch_failure_keeps_empty_catalog(self, mock_gateway):
        mock_gateway.get_properties.side_effect = GatewayError(
            "Failed to fetch properties"
        )
        store = _store(mock_gateway)
        await store.load()

        assert store.properties == []
        assert store.is_loading_properties is False

    @pytest.mark.asyncio
    async def test_admin_data_only_loaded_for_admins(self, mock_gateway):
        await _store(mock_gateway).load()
        mock_gateway.get_leads.assert_not_awaited()

        admin_storage = MemoryStorage({"isAdmin": "true"})
        mock_gateway.get_leads.return_value = [{"_id": "l1", "status": "raw"}]
        store = _store(mock_gateway, admin_storage)
        await store.load()
        assert store.is_admin is True
        assert store.leads == [{"id": "l1", "status": "raw"}]
        mock_gateway.get_site_visits.assert_awaited()

    @pytest.mark.asyncio
    async def test_context_manager_loads_and_closes(self, mock_gateway):
        async with _store(mock_gateway) as store:
            mock_gateway.get_properties.assert_awaited_once()
            assert store.properties == []
        mock_gateway.aclose.assert_awaited_once()


class TestLocalState:
    def test_toggle_favorite_twice_restores_list(self, mock_gateway, storage):
        store = _store(mock_gateway, storage)
        assert store.toggle_favorite("p1") is True
        assert store.is_favorite("p1")
        assert store.toggle_favorite("p1") is False
        assert store.favorites == []
        assert json.loads(storage.get_item("favorites")) == []

    def test_favorites_persist_across_stores(self, mock_gateway, storage):
        _store(mock_gateway, storage).toggle_favorite("p9")
        assert _store(mock_gateway, storage).favorites == ["p9"]

    def test_recently_viewed_is_capped_and_deduplicated(self, mock_gateway, storage):
        store = _store(mock_gateway, storage)
        for i in range(11):
            store.add_to_recently_viewed(f"p{i}")
        assert len(store.recently_viewed) == 10
        assert store.recently_viewed[0] == "p10"
        assert "p0" not in store.recently_viewed

        store.add_to_recently_viewed("p5")
        assert store.recently_viewed[0] == "p5"
        assert store.recently_viewed.count("p5") == 1
        assert json.loads(storage.get_item("recentlyViewed")) == store.recently_viewed

    def test_corrupt_storage_reads_as_empty(self, mock_gateway):
        storage = MemoryStorage({"favorites": "{not json", "recentlyViewed": "42"})
        store = _store(mock_gateway, storage)
        assert store.favorites == []
        assert store.recently_viewed == []

    def test_hand_edited_duplicates_are_collapsed(self, mock_gateway):
        storage = MemoryStorage(
            {"favorites": '["p1", "p1", "p2"]', "recentlyViewed": '["p3", "p3"]'}
        )
        store = _store(mock_gateway, storage)
        assert store.favorites == ["p1", "p2"]
        assert store.recently_viewed == ["p3"]

        assert store.toggle_favorite("p1") is False
        assert store.favorites == ["p2"]

    @pytest.mark.asyncio
    async def test_favorite_properties_skip_unknown_ids(self, mock_gateway):
        mock_gateway.get_properties.return_value = [_server_property("p1")]
        store = _store(mock_gateway)
        await store.load()
        store.toggle_favorite("missing")
        store.toggle_favorite("p1")
        assert [p["id"] for p in store.favorite_properties()] == ["p1"]


class TestAdminSession:
    @pytest.mark.asyncio
    async def test_correct_passphrase_logs_in(self, mock_gateway, storage):
        store = _store(mock_gateway, storage, admin_passphrase=SecretStr("admin123"))
        assert await store.login("admin123") is True
        assert store.is_admin is True
        assert storage.get_item("isAdmin") == "true"
        mock_gateway.get_leads.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_wrong_passphrase_is_rejected(self, mock_gateway, storage):
        store = _store(mock_gateway, storage, admin_passphrase=SecretStr("admin123"))
        assert await store.login("wrong") is False
        assert store.is_admin is False
        assert storage.get_item("isAdmin") is None

    @pytest.mark.asyncio
    async def test_no_passphrase_configured_never_logs_in(self, mock_gateway):
        store = _store(mock_gateway)
        assert await store.login("") is False
        assert await store.login("admin123") is False

    @pytest.mark.asyncio
    async def test_logout_clears_flag(self, mock_gateway, storage):
        store = _store(mock_gateway, storage, admin_passphrase=SecretStr("s3cret"))
        await store.login("s3cret")
        store.logout()
        assert store.is_admin is False
        assert storage.get_item("isAdmin") is None


class TestMutations:
    @pytest.mark.asyncio
    async def test_add_property_prepends(self, mock_gateway):
        mock_gateway.get_properties.return_value = [_server_property("old")]
        mock_gateway.create_property.return_value = _server_property("new")
        store = _store(mock_gateway)
        await store.load()

        created = await store.add_property({"title": "New"})
        assert created["id"] == "new"
        assert [p["id"] for p in store.properties] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_failed_add_leaves_state_unchanged(self, mock_gateway):
        mock_gateway.get_properties.return_value = [_server_property("old")]
        mock_gateway.create_property.side_effect = GatewayError(
            "Failed to create property", 400, "Missing required fields"
        )
        store = _store(mock_gateway)
        await store.load()
        before = list(store.properties)

        with pytest.raises(GatewayError):
            await store.add_property({"title": "Broken"})
        assert store.properties == before

    @pytest.mark.asyncio
    async def test_update_and_delete_property(self, mock_gateway):
        mock_gateway.get_properties.return_value = [
            _server_property("a"),
            _server_property("b"),
        ]
        mock_gateway.update_property.return_value = _server_property("b", price=5)
        store = _store(mock_gateway)
        await store.load()

        await store.update_property("b", {"price": 5})
        assert store.get_property("b")["price"] == 5

        await store.delete_property("a")
        assert [p["id"] for p in store.properties] == ["b"]
        assert store.get_property("a") is None

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_record(self, mock_gateway):
        mock_gateway.get_properties.return_value = [_server_property("a")]
        mock_gateway.delete_property.side_effect = GatewayError(
            "Failed to delete property", 404, "Property not found"
        )
        store = _store(mock_gateway)
        await store.load()

        with pytest.raises(GatewayError):
            await store.delete_property("a")
        assert store.get_property("a") is not None

    @pytest.mark.asyncio
    async def test_lead_status_update_replaces_in_place(self, mock_gateway):
        mock_gateway.create_lead.side_effect = [
            {"_id": "l1", "status": "raw"},
            {"_id": "l2", "status": "raw"},
        ]
        mock_gateway.update_lead.return_value = {"_id": "l1", "status": "negotiation"}
        store = _store(mock_gateway)

        await store.add_lead({"name": "a", "phone": "1"})
        await store.add_lead({"name": "b", "phone": "2"})
        await store.update_lead_status("l1", "negotiation")

        assert [(lead["id"], lead["status"]) for lead in store.leads] == [
            ("l2", "raw"),
            ("l1", "negotiation"),
        ]
        mock_gateway.update_lead.assert_awaited_once_with(
            "l1", {"status": "negotiation"}
        )

        await store.delete_lead("l2")
        assert [lead["id"] for lead in store.leads] == ["l1"]

    @pytest.mark.asyncio
    async def test_site_visit_status_and_delete(self, mock_gateway):
        mock_gateway.get_site_visits.return_value = [
            {"_id": "v1", "status": "pending"}
        ]
        mock_gateway.update_site_visit.return_value = {
            "_id": "v1",
            "status": "cancelled",
        }
        store = _store(mock_gateway, MemoryStorage({"isAdmin": "true"}))
        await store.load()

        await store.update_site_visit_status("v1", "cancelled")
        assert store.site_visits[0]["status"] == "cancelled"

        await store.delete_site_visit("v1")
        assert store.site_visits == []


class TestSiteVisitBooking:
    VISIT = {
        "name": "Kavya",
        "phone": "+91 99001 44556",
        "propertyId": "p1",
        "date": "2026-11-02T10:30:00Z",
    }

    @pytest.mark.asyncio
    async def test_booking_creates_visit_and_companion_lead(self, mock_gateway):
        mock_gateway.create_site_visit.return_value = {
            "_id": "v1",
            **self.VISIT,
            "status": "pending",
        }
        mock_gateway.create_lead.return_value = {
            "_id": "l1",
            "status": "site-visit-requested",
        }
        store = _store(mock_gateway)

        booking = await store.add_site_visit(self.VISIT)

        assert booking.is_complete
        assert booking.visit["id"] == "v1"
        assert booking.lead["id"] == "l1"
        mock_gateway.create_site_visit.assert_awaited_once_with(self.VISIT)
        mock_gateway.create_lead.assert_awaited_once_with(
            {
                "name": "Kavya",
                "phone": "+91 99001 44556",
                "propertyId": "p1",
                "status": "site-visit-requested",
                "visitDate": VISIT_DATE,
            }
        )
        assert [v["id"] for v in store.site_visits] == ["v1"]
        assert [lead["id"] for lead in store.leads] == ["l1"]
        assert store.unreconciled_visit_ids == []

    @pytest.mark.asyncio
    async def test_visit_failure_creates_nothing(self, mock_gateway):
        mock_gateway.create_site_visit.side_effect = GatewayError(
            "Failed to create site visit"
        )
        store = _store(mock_gateway)

        with pytest.raises(GatewayError):
            await store.add_site_visit(self.VISIT)
        mock_gateway.create_lead.assert_not_awaited()
        assert store.site_visits == []

    @pytest.mark.asyncio
    async def test_companion_failure_is_queued_and_reconciled(self, mock_gateway):
        mock_gateway.create_site_visit.return_value = {"_id": "v1", **self.VISIT}
        mock_gateway.create_lead.side_effect = [
            GatewayError("Failed to create lead"),
            {"_id": "l1", "status": "site-visit-requested"},
        ]
        store = _store(mock_gateway)

        booking = await store.add_site_visit(self.VISIT)
        assert not booking.is_complete
        assert isinstance(booking.lead_error, GatewayError)
        assert [v["id"] for v in store.site_visits] == ["v1"]
        assert store.leads == []
        assert store.unreconciled_visit_ids == ["v1"]

        assert await store.reconcile_companion_leads() == 1
        assert store.unreconciled_visit_ids == []
        assert [lead["id"] for lead in store.leads] == ["l1"]

    @pytest.mark.asyncio
    async def test_reconcile_keeps_still_failing_leads(self, mock_gateway):
        mock_gateway.create_site_visit.return_value = {"_id": "v1", **self.VISIT}
        mock_gateway.create_lead.side_effect = GatewayError("Failed to create lead")
        store = _store(mock_gateway)

        await store.add_site_visit(self.VISIT)
        assert await store.reconcile_companion_leads() == 0
        assert store.unreconciled_visit_ids == ["v1"]

    def test_companion_payload_uses_confirmed_visit(self):
        visit = normalize_record(
            {
                "_id": "v1",
                "name": "Kavya",
                "phone": "1",
                "propertyId": {"_id": "p1", "title": "Skyline"},
                "date": "2026-11-02T10:30:00Z",
            }
        )
        payload = companion_lead_payload(visit)
        assert payload["propertyId"] == "p1"
        assert payload["status"] == "site-visit-requested"
        assert payload["visitDate"] == VISIT_DATE
        assert "date" not in payload

    @pytest.mark.asyncio
    async def test_snake_case_booking_records_companion_lead(self, gateway):
        store = _store(gateway)

        booking = await store.add_site_visit(
            {
                "name": "Asha",
                "phone": "1",
                "property_id": "P1",
                "date": "2026-11-02T10:30:00Z",
            }
        )

        assert booking.is_complete
        assert store.unreconciled_visit_ids == []
        assert booking.lead["propertyId"] == "P1"
        assert booking.lead["status"] == "site-visit-requested"
        assert booking.lead["visitDate"] == VISIT_DATE

        server_leads = await gateway.get_leads()
        assert [lead["propertyId"] for lead in server_leads] == ["P1"]


class TestSubscriptions:
    def test_listener_called_until_unsubscribed(self, mock_gateway):
        store = _store(mock_gateway)
        listener = MagicMock()
        unsubscribe = store.subscribe(listener)

        store.toggle_favorite("p1")
        assert listener.call_count == 1

        unsubscribe()
        store.toggle_favorite("p1")
        assert listener.call_count == 1

    def test_failing_listener_does_not_block_others(self, mock_gateway):
        store = _store(mock_gateway)
        broken = MagicMock(side_effect=RuntimeError("render failed"))
        healthy = MagicMock()
        store.subscribe(broken)
        store.subscribe(healthy)

        store.add_to_recently_viewed("p1")
        healthy.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_drops_listeners(self, mock_gateway):
        store = _store(mock_gateway)
        listener = MagicMock()
        store.subscribe(listener)
        await store.close()
        store.toggle_favorite("p1")
        listener.assert_not_called()
