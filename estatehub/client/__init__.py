"""Client-side data layer: REST gateway, local storage and state store."""

from estatehub.client.gateway import ApiGateway, GatewayError
from estatehub.client.storage import JsonFileStorage, MemoryStorage
from estatehub.client.store import AppStore, SiteVisitBooking, create_store

__all__ = [
    "ApiGateway",
    "GatewayError",
    "JsonFileStorage",
    "MemoryStorage",
    "AppStore",
    "SiteVisitBooking",
    "create_store",
]
