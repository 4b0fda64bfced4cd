from fastapi import APIRouter

from estatehub.api.endpoints import health, leads, properties, site_visits

router = APIRouter(prefix="/api")

router.include_router(properties.router)
router.include_router(leads.router)
router.include_router(site_visits.router)
router.include_router(health.router)
