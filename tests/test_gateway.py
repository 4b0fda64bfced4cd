import httpx
import pytest

from estatehub.client.gateway import ApiGateway, GatewayError


def _mock_gateway(handler) -> ApiGateway:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://api.test/api"
    )
    return ApiGateway(client=client)


class TestGatewayAgainstApp:
    """Gateway calls routed in-process to the FastAPI app."""

    @pytest.mark.asyncio
    async def test_property_lifecycle(self, gateway):
        created = await gateway.create_property(
            {"title": "Loft", "city": "Hyderabad", "price": 5_800_000, "area": 2800}
        )
        assert created["_id"]

        fetched = await gateway.get_property(created["_id"])
        assert fetched["title"] == "Loft"

        updated = await gateway.update_property(created["_id"], {"isPremium": True})
        assert updated["isPremium"] is True

        listing = await gateway.get_properties()
        assert [p["_id"] for p in listing] == [created["_id"]]

        deleted = await gateway.delete_property(created["_id"])
        assert deleted == {"message": "Property deleted successfully"}

    @pytest.mark.asyncio
    async def test_missing_fields_surface_server_message(self, gateway):
        with pytest.raises(GatewayError) as excinfo:
            await gateway.create_property({"title": "No city"})
        assert excinfo.value.detail == "Failed to create property"
        assert excinfo.value.status_code == 400
        assert excinfo.value.server_message.startswith("Missing required fields")

    @pytest.mark.asyncio
    async def test_not_found(self, gateway):
        with pytest.raises(GatewayError) as excinfo:
            await gateway.delete_lead("nope")
        assert excinfo.value.status_code == 404
        assert excinfo.value.server_message == "Lead not found"
        assert str(excinfo.value) == "Failed to delete lead"

    @pytest.mark.asyncio
    async def test_leads_and_visits(self, gateway):
        lead = await gateway.create_lead({"name": "Rohan", "phone": "1"})
        await gateway.update_lead(lead["_id"], {"status": "verified"})
        assert (await gateway.get_leads())[0]["status"] == "verified"

        visit = await gateway.create_site_visit(
            {
                "name": "Rohan",
                "phone": "1",
                "propertyId": "p",
                "date": "2026-11-02T09:00:00Z",
            }
        )
        await gateway.update_site_visit(visit["_id"], {"status": "completed"})
        assert (await gateway.get_site_visits())[0]["status"] == "completed"
        await gateway.delete_site_visit(visit["_id"])
        assert await gateway.get_site_visits() == []

    @pytest.mark.asyncio
    async def test_health(self, gateway):
        assert (await gateway.health())["status"] == "ok"


class TestGatewayFailures:
    """Transport-level behaviour with a stubbed HTTP layer."""

    @pytest.mark.asyncio
    async def test_server_error_body_is_captured(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                500, json={"error": "Failed to create property", "details": "boom"}
            )

        async with _mock_gateway(handler) as gateway:
            with pytest.raises(GatewayError) as excinfo:
                await gateway.create_property({"title": "x"})
        assert excinfo.value.status_code == 500
        assert excinfo.value.server_message == "Failed to create property"

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        async with _mock_gateway(handler) as gateway:
            with pytest.raises(GatewayError) as excinfo:
                await gateway.get_properties()
        assert excinfo.value.detail == "Failed to fetch properties"
        assert excinfo.value.server_message == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _mock_gateway(handler) as gateway:
            with pytest.raises(GatewayError) as excinfo:
                await gateway.get_leads()
        assert excinfo.value.detail == "Failed to fetch leads"
        assert excinfo.value.status_code is None
        assert excinfo.value.server_message is None

    @pytest.mark.asyncio
    async def test_requests_hit_resource_paths(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            return httpx.Response(200, json={"message": "ok"})

        async with _mock_gateway(handler) as gateway:
            await gateway.update_site_visit("v1", {"status": "confirmed"})
            await gateway.delete_property("p1")

        assert seen == [
            ("PUT", "/api/site-visits/v1"),
            ("DELETE", "/api/properties/p1"),
        ]
