from __future__ import annotations

from django.conf import settings
from ninja import NinjaAPI

from analytics.api import router as analytics_router
from catalog.api import router as catalog_router
from checkout.api import router as checkout_router
from clients.api import router as clients_router
from pricing.api import router as pricing_router
from shipping.api import router as shipping_router

docs_url = "/docs" if getattr(settings, "NINJA_ENABLE_DOCS", True) else None
openapi_url = "/openapi.json" if getattr(settings,
                                         "NINJA_ENABLE_DOCS", True) else None

api = NinjaAPI(
    title="Order desk API",
    version="1",
    docs_url=docs_url,
    openapi_url=openapi_url,
)

api.add_router("/catalog", catalog_router)
api.add_router("/clients", clients_router)
api.add_router("/pricing", pricing_router)
api.add_router("/shipping", shipping_router)
api.add_router("/checkout", checkout_router)
api.add_router("/analytics", analytics_router)


@api.get("/health")
def health(request):
    return {"status": "ok"}
