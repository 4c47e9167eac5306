"""Assemble the v1 API from an entity registry."""

from fastapi import APIRouter

from src.foodservice.api.v1 import diners, purchase_orders
from src.foodservice.api.v1.entities import build_entity_router
from src.foodservice.crud import EntityRegistry

# Generic routes replaced by a domain router mounted ahead of them.
DOMAIN_OVERRIDES: dict[str, frozenset[str]] = {
    "diners": frozenset({"list", "create", "bulk_create"}),
}

DOMAIN_ROUTERS: dict[str, APIRouter] = {
    "diners": diners.router,
    "purchase-orders": purchase_orders.router,
}


def build_api_router(registry: EntityRegistry) -> APIRouter:
    """One router per registered entity under ``/api/v1``."""
    api_router = APIRouter(prefix="/api/v1")
    for entity in registry:
        domain_router = DOMAIN_ROUTERS.get(entity.name)
        if domain_router is not None:
            api_router.include_router(domain_router)
        api_router.include_router(
            build_entity_router(entity, exclude=DOMAIN_OVERRIDES.get(entity.name, frozenset()))
        )
    return api_router
