"""
Geo-targeted promotion matching.

A promotion without geo bindings applies everywhere. A geo-bound promotion
applies only to request locations that match one of its bindings by region
code, by city, or by great-circle distance from the binding centre.
"""
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from menu_service.models.promotion import GeoPromotion, Promotion

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class MenuLocation:
    """Where the menu will be shown. Any subset of fields may be given."""
    region_code: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def _same_text(a: Optional[str], b: Optional[str]) -> bool:
    return a is not None and b is not None and a.strip().casefold() == b.strip().casefold()


class GeoPromotionMatcher:
    """Filters promotions down to those valid at a location."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def binding_matches(self, binding: GeoPromotion, location: MenuLocation) -> bool:
        if _same_text(binding.region_code, location.region_code):
            return True
        if _same_text(binding.city, location.city):
            return True

        if (
            location.has_coordinates
            and binding.latitude is not None
            and binding.longitude is not None
            and binding.radius_km is not None
        ):
            distance = haversine_km(
                float(binding.latitude),
                float(binding.longitude),
                float(location.latitude),
                float(location.longitude),
            )
            return distance <= float(binding.radius_km)

        return False

    def applies(self, promotion: Promotion, location: Optional[MenuLocation]) -> bool:
        bindings = promotion.geo_promotions or []
        if not bindings:
            return True
        # Geo-bound promotions need targeting on and a location to match against
        if not self.enabled or location is None:
            return False
        return any(self.binding_matches(b, location) for b in bindings)

    def filter(self, promotions: Iterable[Promotion], location: Optional[MenuLocation]) -> List[Promotion]:
        return [p for p in promotions if self.applies(p, location)]
