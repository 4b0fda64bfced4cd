import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic_core import to_jsonable_python

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class GatewayError(Exception):
    """Raised when a REST call does not come back with a 2xx response.

    ``detail`` is the generic ``"Failed to <verb> <resource>"`` message;
    ``status_code`` and ``server_message`` carry what the API said, when
    it said anything (both are ``None`` for transport failures).
    """

    def __init__(
        self,
        detail: str,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
    ):
        self.detail = detail
        self.status_code = status_code
        self.server_message = server_message
        super().__init__(detail)


class ApiGateway:
    """Thin async client for the marketplace REST API.

    Each method issues exactly one request: no retries, no caching and
    no timeout beyond the httpx default.  Pass *client* to reuse an
    existing ``httpx.AsyncClient`` (its ``base_url`` must point at the
    API root); the gateway only closes clients it created itself.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url)

    async def __aenter__(self) -> "ApiGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        failure: str,
        payload: Optional[Document] = None,
    ) -> Any:
        kwargs: Dict[str, Any] = {}
        if payload is not None:
            kwargs["json"] = to_jsonable_python(payload)
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise GatewayError(failure) from exc

        if not response.is_success:
            server_message = _error_message(response)
            logger.error(
                "%s %s returned %s: %s",
                method,
                path,
                response.status_code,
                server_message,
            )
            raise GatewayError(failure, response.status_code, server_message)
        return response.json()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    async def get_properties(self) -> List[Document]:
        return await self._request("GET", "properties", "Failed to fetch properties")

    async def get_property(self, property_id: str) -> Document:
        return await self._request(
            "GET", f"properties/{property_id}", "Failed to fetch property"
        )

    async def create_property(self, data: Document) -> Document:
        return await self._request(
            "POST", "properties", "Failed to create property", data
        )

    async def update_property(self, property_id: str, updates: Document) -> Document:
        return await self._request(
            "PUT", f"properties/{property_id}", "Failed to update property", updates
        )

    async def delete_property(self, property_id: str) -> Document:
        return await self._request(
            "DELETE", f"properties/{property_id}", "Failed to delete property"
        )

    # ------------------------------------------------------------------
    # Leads
    # ------------------------------------------------------------------

    async def get_leads(self) -> List[Document]:
        return await self._request("GET", "leads", "Failed to fetch leads")

    async def create_lead(self, data: Document) -> Document:
        return await self._request("POST", "leads", "Failed to create lead", data)

    async def update_lead(self, lead_id: str, updates: Document) -> Document:
        return await self._request(
            "PUT", f"leads/{lead_id}", "Failed to update lead", updates
        )

    async def delete_lead(self, lead_id: str) -> Document:
        return await self._request(
            "DELETE", f"leads/{lead_id}", "Failed to delete lead"
        )

    # ------------------------------------------------------------------
    # Site visits
    # ------------------------------------------------------------------

    async def get_site_visits(self) -> List[Document]:
        return await self._request(
            "GET", "site-visits", "Failed to fetch site visits"
        )

    async def create_site_visit(self, data: Document) -> Document:
        return await self._request(
            "POST", "site-visits", "Failed to create site visit", data
        )

    async def update_site_visit(self, visit_id: str, updates: Document) -> Document:
        return await self._request(
            "PUT", f"site-visits/{visit_id}", "Failed to update site visit", updates
        )

    async def delete_site_visit(self, visit_id: str) -> Document:
        return await self._request(
            "DELETE", f"site-visits/{visit_id}", "Failed to delete site visit"
        )

    async def health(self) -> Document:
        return await self._request("GET", "health", "Failed to check health")


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        return body.get("error")
    return None
