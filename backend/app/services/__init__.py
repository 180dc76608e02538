# Services module

from app.services.stadium_geo_service import StadiumGeoService, stadium_geo
from app.services.pricing_service import PriceBreakdown, PricingService, pricing, to_money
from app.services.menu_service import MenuService, MENU_ITEMS
from app.services.order_service import OrderService
from app.services.nearby_order_service import NearbyOrderService
from app.services.claim_service import ClaimService
from app.services.runner_service import RunnerService
from app.services.batch_service import BatchService

__all__ = [
    "StadiumGeoService",
    "stadium_geo",
    "PriceBreakdown",
    "PricingService",
    "pricing",
    "to_money",
    "MenuService",
    "MENU_ITEMS",
    "OrderService",
    "NearbyOrderService",
    "ClaimService",
    "RunnerService",
    "BatchService",
]
