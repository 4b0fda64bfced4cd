"""Application state store.

``AppStore`` is the single source of truth for everything the
presentation layer renders.  It composes the REST gateway with local
key-value storage: server collections are read through on ``load`` and
written through on every mutation, while favorites, recently-viewed ids
and the admin flag live only in local storage.

The store is an ordinary object with an explicit lifecycle::

    async with AppStore(gateway, storage, admin_passphrase=...) as store:
        store.toggle_favorite(property_id)

Mutations only touch in-memory state after the server confirms them.
Every failed mutation is logged and re-raised as ``GatewayError`` so the
caller decides how to surface it.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import SecretStr

from estatehub.client.config import ClientSettings
from estatehub.client.gateway import ApiGateway, GatewayError
from estatehub.client.normalize import (
    Record,
    normalize_many,
    normalize_property,
    normalize_record,
    property_ref,
)
from estatehub.client.storage import (
    FAVORITES_KEY,
    IS_ADMIN_KEY,
    RECENTLY_VIEWED_KEY,
    JsonFileStorage,
    KeyValueStorage,
    load_id_list,
    save_id_list,
)

logger = logging.getLogger(__name__)

DEFAULT_RECENTLY_VIEWED_LIMIT = 10
SITE_VISIT_LEAD_STATUS = "site-visit-requested"

Listener = Callable[[], None]


@dataclass
class SiteVisitBooking:
    """Outcome of the two-step site-visit booking.

    The visit is always present (step one raises on failure).  ``lead``
    is ``None`` when the companion lead could not be created, in which
    case ``lead_error`` holds the reason and the booking is queued for
    :meth:`AppStore.reconcile_companion_leads`.
    """

    visit: Record
    lead: Optional[Record] = None
    lead_error: Optional[GatewayError] = None

    @property
    def is_complete(self) -> bool:
        return self.lead is not None


@dataclass
class _PendingCompanionLead:
    visit_id: str
    payload: Dict[str, Any]


def companion_lead_payload(visit: Record) -> Dict[str, Any]:
    """Lead that mirrors the contact details of a booked visit.

    *visit* is the normalized record the server returned, so the lead
    always carries the canonical property id and visit date.
    """
    return {
        "name": visit["name"],
        "phone": visit["phone"],
        "propertyId": property_ref(visit),
        "status": SITE_VISIT_LEAD_STATUS,
        "visitDate": visit["date"],
    }


class AppStore:
    def __init__(
        self,
        gateway: ApiGateway,
        storage: KeyValueStorage,
        admin_passphrase: Optional[SecretStr] = None,
        recently_viewed_limit: int = DEFAULT_RECENTLY_VIEWED_LIMIT,
    ) -> None:
        self._gateway = gateway
        self._storage = storage
        self._admin_passphrase = admin_passphrase
        self._recently_viewed_limit = recently_viewed_limit
        self._listeners: List[Listener] = []
        self._pending_leads: List[_PendingCompanionLead] = []

        self.properties: List[Record] = []
        self.leads: List[Record] = []
        self.site_visits: List[Record] = []
        self.is_loading_properties = True

        self.favorites: List[str] = load_id_list(storage, FAVORITES_KEY)
        self.recently_viewed: List[str] = load_id_list(
            storage, RECENTLY_VIEWED_KEY
        )[:recently_viewed_limit]
        self.is_admin: bool = storage.get_item(IS_ADMIN_KEY) == "true"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "AppStore":
        await self.load()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def load(self) -> None:
        """Eagerly fetch what the current session may see."""
        await self.refresh_properties()
        if self.is_admin:
            await self.refresh_admin_data()

    async def close(self) -> None:
        self._listeners.clear()
        await self._gateway.aclose()

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every state change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("State listener %r failed", listener)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def refresh_properties(self) -> None:
        self.is_loading_properties = True
        try:
            data = await self._gateway.get_properties()
        except GatewayError as exc:
            logger.error("Failed to fetch properties: %s", exc)
        else:
            self.properties = normalize_many(data, properties=True)
            logger.info("Properties loaded: %d", len(self.properties))
        finally:
            self.is_loading_properties = False
            self._notify()

    async def refresh_admin_data(self) -> None:
        """Fetch leads and site visits; each failure is logged on its own."""
        try:
            leads = await self._gateway.get_leads()
        except GatewayError as exc:
            logger.error("Failed to fetch leads: %s", exc)
        else:
            self.leads = normalize_many(leads)
            logger.info("Leads loaded: %d", len(self.leads))

        try:
            visits = await self._gateway.get_site_visits()
        except GatewayError as exc:
            logger.error("Failed to fetch site visits: %s", exc)
        else:
            self.site_visits = normalize_many(visits)
            logger.info("Site visits loaded: %d", len(self.site_visits))

        self._notify()

    def get_property(self, property_id: str) -> Optional[Record]:
        for prop in self.properties:
            if prop["id"] == property_id:
                return prop
        return None

    def _properties_for(self, ids: List[str]) -> List[Record]:
        by_id = {prop["id"]: prop for prop in self.properties}
        return [by_id[pid] for pid in ids if pid in by_id]

    def favorite_properties(self) -> List[Record]:
        return self._properties_for(self.favorites)

    def recently_viewed_properties(self) -> List[Record]:
        return self._properties_for(self.recently_viewed)

    # ------------------------------------------------------------------
    # Local-only state
    # ------------------------------------------------------------------

    def is_favorite(self, property_id: str) -> bool:
        return property_id in self.favorites

    def toggle_favorite(self, property_id: str) -> bool:
        """Add or remove *property_id*; return whether it is now a favorite."""
        if property_id in self.favorites:
            self.favorites = [pid for pid in self.favorites if pid != property_id]
        else:
            self.favorites = [*self.favorites, property_id]
        save_id_list(self._storage, FAVORITES_KEY, self.favorites)
        self._notify()
        return property_id in self.favorites

    def add_to_recently_viewed(self, property_id: str) -> None:
        rest = [pid for pid in self.recently_viewed if pid != property_id]
        self.recently_viewed = [property_id, *rest][: self._recently_viewed_limit]
        save_id_list(self._storage, RECENTLY_VIEWED_KEY, self.recently_viewed)
        self._notify()

    # ------------------------------------------------------------------
    # Admin session
    # ------------------------------------------------------------------

    async def login(self, password: str) -> bool:
        """Unlock admin mode if *password* matches the shared passphrase.

        Never raises: a wrong password, or no passphrase configured at
        all, simply returns ``False``.
        """
        if self._admin_passphrase is None:
            logger.warning("Admin login attempted but no passphrase is configured")
            return False
        expected = self._admin_passphrase.get_secret_value()
        if not secrets.compare_digest(password.encode(), expected.encode()):
            logger.warning("Admin login rejected")
            return False

        self.is_admin = True
        self._storage.set_item(IS_ADMIN_KEY, "true")
        logger.info("Admin session started")
        await self.refresh_admin_data()
        return True

    def logout(self) -> None:
        """Drop admin mode; already fetched leads and visits stay cached."""
        self.is_admin = False
        self._storage.remove_item(IS_ADMIN_KEY)
        logger.info("Admin session ended")
        self._notify()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    async def add_property(self, data: Dict[str, Any]) -> Record:
        try:
            created = await self._gateway.create_property(data)
        except GatewayError as exc:
            logger.error("Failed to add property: %s", exc.server_message or exc)
            raise
        prop = normalize_property(created)
        self.properties = [prop, *self.properties]
        self._notify()
        return prop

    async def update_property(self, property_id: str, updates: Dict[str, Any]) -> Record:
        try:
            updated = await self._gateway.update_property(property_id, updates)
        except GatewayError as exc:
            logger.error("Failed to update property %s: %s", property_id, exc)
            raise
        prop = normalize_property(updated)
        self.properties = _replace(self.properties, property_id, prop)
        self._notify()
        return prop

    async def delete_property(self, property_id: str) -> None:
        try:
            await self._gateway.delete_property(property_id)
        except GatewayError as exc:
            logger.error("Failed to delete property %s: %s", property_id, exc)
            raise
        self.properties = [p for p in self.properties if p["id"] != property_id]
        self._notify()

    # ------------------------------------------------------------------
    # Leads
    # ------------------------------------------------------------------

    async def add_lead(self, data: Dict[str, Any]) -> Record:
        try:
            created = await self._gateway.create_lead(data)
        except GatewayError as exc:
            logger.error("Failed to add lead: %s", exc)
            raise
        lead = normalize_record(created)
        self.leads = [lead, *self.leads]
        logger.info("Lead created: %s", lead["id"])
        self._notify()
        return lead

    async def update_lead_status(self, lead_id: str, status: str) -> Record:
        try:
            updated = await self._gateway.update_lead(lead_id, {"status": status})
        except GatewayError as exc:
            logger.error("Failed to update lead %s status: %s", lead_id, exc)
            raise
        lead = normalize_record(updated)
        self.leads = _replace(self.leads, lead_id, lead)
        self._notify()
        return lead

    async def delete_lead(self, lead_id: str) -> None:
        try:
            await self._gateway.delete_lead(lead_id)
        except GatewayError as exc:
            logger.error("Failed to delete lead %s: %s", lead_id, exc)
            raise
        self.leads = [lead for lead in self.leads if lead["id"] != lead_id]
        self._notify()

    # ------------------------------------------------------------------
    # Site visits
    # ------------------------------------------------------------------

    async def add_site_visit(self, data: Dict[str, Any]) -> SiteVisitBooking:
        """Book a visit, then record a matching lead.

        The two writes are independent.  If the lead cannot be created
        the visit stays booked, the failure is logged and the lead is
        queued for :meth:`reconcile_companion_leads`.
        """
        try:
            created = await self._gateway.create_site_visit(data)
        except GatewayError as exc:
            logger.error("Failed to add site visit: %s", exc)
            raise
        visit = normalize_record(created)
        self.site_visits = [visit, *self.site_visits]
        self._notify()

        booking = SiteVisitBooking(visit=visit)
        payload = companion_lead_payload(visit)
        try:
            booking.lead = await self.add_lead(payload)
        except GatewayError as exc:
            logger.error(
                "Site visit %s booked but its lead was not recorded: %s",
                visit["id"],
                exc,
            )
            booking.lead_error = exc
            self._pending_leads.append(
                _PendingCompanionLead(visit_id=visit["id"], payload=payload)
            )
        return booking

    @property
    def unreconciled_visit_ids(self) -> List[str]:
        """Visits whose companion lead is still missing."""
        return [pending.visit_id for pending in self._pending_leads]

    async def reconcile_companion_leads(self) -> int:
        """Retry every missing companion lead; return how many succeeded."""
        still_pending: List[_PendingCompanionLead] = []
        repaired = 0
        for pending in self._pending_leads:
            try:
                await self.add_lead(pending.payload)
            except GatewayError:
                still_pending.append(pending)
            else:
                repaired += 1
        self._pending_leads = still_pending
        if repaired:
            logger.info("Reconciled %d companion lead(s)", repaired)
        return repaired

    async def update_site_visit_status(self, visit_id: str, status: str) -> Record:
        try:
            updated = await self._gateway.update_site_visit(
                visit_id, {"status": status}
            )
        except GatewayError as exc:
            logger.error("Failed to update site visit %s status: %s", visit_id, exc)
            raise
        visit = normalize_record(updated)
        self.site_visits = _replace(self.site_visits, visit_id, visit)
        self._notify()
        return visit

    async def delete_site_visit(self, visit_id: str) -> None:
        try:
            await self._gateway.delete_site_visit(visit_id)
        except GatewayError as exc:
            logger.error("Failed to delete site visit %s: %s", visit_id, exc)
            raise
        self.site_visits = [v for v in self.site_visits if v["id"] != visit_id]
        self._notify()


def _replace(records: List[Record], record_id: str, new: Record) -> List[Record]:
    return [new if r["id"] == record_id else r for r in records]


def create_store(settings: Optional[ClientSettings] = None) -> AppStore:
    """Composition root: wire a store from configuration."""
    settings = settings or ClientSettings()
    return AppStore(
        gateway=ApiGateway(base_url=settings.API_URL),
        storage=JsonFileStorage(settings.STORAGE_PATH),
        admin_passphrase=settings.ADMIN_PASSPHRASE,
        recently_viewed_limit=settings.RECENTLY_VIEWED_LIMIT,
    )
