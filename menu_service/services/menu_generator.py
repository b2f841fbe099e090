"""
Personalized menu generation for customer segments.

For every product ranked by segment demand, the generator applies the best
active promotion or, when there is none, an elasticity-driven dynamic price,
and saves the resulting menu in one unit of work.
"""
import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional
from uuid import UUID

from menu_service.core.config import Settings
from menu_service.core.errors import DeadlineExceededError, InvalidInputError
from menu_service.core.results import Found, Lookup, NotFound, utcnow
from menu_service.models.menu import PersonalizedMenu, PersonalizedMenuItem
from menu_service.models.segment import ProductDemandMetric
from menu_service.services.geo import GeoPromotionMatcher, MenuLocation
from menu_service.services.menu_store import MenuStore
from menu_service.services.pricing import discounted_price, dynamic_price, round_price, to_decimal
from menu_service.services.promotion_selector import select_promotion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuGenerationConfig:
    """Feature switches and limits for one generator instance."""
    geo_targeting_enabled: bool = True
    dynamic_pricing_enabled: bool = True
    request_timeout_seconds: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MenuGenerationConfig":
        return cls(
            geo_targeting_enabled=settings.GEO_TARGETING_ENABLED,
            dynamic_pricing_enabled=settings.DYNAMIC_PRICING_ENABLED,
            request_timeout_seconds=settings.MENU_REQUEST_TIMEOUT_SECONDS,
        )


class Deadline:
    """Request-scoped time budget checked before each store call."""

    def __init__(self, timeout_seconds: Optional[float]):
        self.timeout_seconds = timeout_seconds
        self._expires_at = None if timeout_seconds is None else time.monotonic() + timeout_seconds

    def check(self, operation: str) -> None:
        if self._expires_at is not None and time.monotonic() >= self._expires_at:
            raise DeadlineExceededError(
                f"Deadline of {self.timeout_seconds}s exceeded before {operation}"
            )


class MenuGenerator:
    """
    Builds and maintains personalized menus.

    Pricing rules per ranked product:
    - inactive products are skipped
    - the active promotion with the highest discount wins and sets discount_applied
    - otherwise the price follows demand elasticity (or stays at base price when
      dynamic pricing is switched off)
    """

    def __init__(
        self,
        store: MenuStore,
        config: Optional[MenuGenerationConfig] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.config = config or MenuGenerationConfig()
        self.clock = clock
        self.geo_matcher = GeoPromotionMatcher(enabled=self.config.geo_targeting_enabled)

    def generate_menu_for_segment(
        self,
        segment_id: UUID,
        location: Optional[MenuLocation] = None,
    ) -> Lookup[PersonalizedMenu]:
        """
        Generate and save a new menu for a segment.

        Args:
            segment_id: Segment UUID
            location: Where the menu is shown, used for geo-targeted promotions

        Returns:
            Found(menu) with the saved menu, or NotFound when the segment is unknown
        """
        deadline = Deadline(self.config.request_timeout_seconds)

        deadline.check("segment lookup")
        segment = self.store.get_segment(segment_id)
        if isinstance(segment, NotFound):
            logger.info(f"Menu generation skipped: segment {segment_id} not found")
            return segment

        deadline.check("demand metrics lookup")
        metrics = self.store.get_ranked_demand_metrics(segment_id)

        # One reading of "now" for promotion windows and the menu timestamp
        now = self.clock()
        menu = PersonalizedMenu(id=uuid.uuid4(), segment_id=segment_id, generated_at=now)

        for metric in metrics:
            product = metric.product
            if not product.is_active:
                logger.debug(f"Skipping inactive product {product.id} for segment {segment_id}")
                continue

            deadline.check(f"promotion lookup for product {product.id}")
            menu.items.append(self._price_item(metric, now, location, position=len(menu.items)))

        deadline.check("menu save")
        saved = self.store.save_menu(menu)

        discounted = sum(1 for item in saved.items if item.discount_applied)
        logger.info(
            f"Generated menu {saved.id} for segment {segment_id}: "
            f"{len(saved.items)} items, {discounted} with promotions"
        )
        return Found(saved)

    def _price_item(
        self,
        metric: ProductDemandMetric,
        now: datetime,
        location: Optional[MenuLocation],
        position: int,
    ) -> PersonalizedMenuItem:
        product = metric.product
        active = self.store.get_active_promotions_for_product(product.id, now)
        eligible = self.geo_matcher.filter(active, location)
        promotion = select_promotion(eligible)

        if promotion is not None:
            price = discounted_price(product.base_price, promotion.discount_percent)
        elif self.config.dynamic_pricing_enabled:
            price = dynamic_price(product.base_price, metric.price_elasticity)
        else:
            price = round_price(to_decimal(product.base_price, "base_price"))

        return PersonalizedMenuItem(
            product_id=product.id,
            final_price=price,
            discount_applied=promotion is not None,
            promotion_id=promotion.id if promotion is not None else None,
            position=position,
        )

    def add_item_to_menu(
        self,
        menu_id: UUID,
        product_id: UUID,
        final_price: Decimal,
        discount_applied: bool,
        promotion_id: Optional[UUID] = None,
    ) -> Lookup[PersonalizedMenu]:
        """
        Put a caller-priced product on an existing menu.

        A product already on the menu has its price, flag and promotion replaced.
        """
        price = to_decimal(final_price, "final_price")
        if price < 0:
            raise InvalidInputError(f"final_price must not be negative, got {price}")
        if discount_applied != (promotion_id is not None):
            raise InvalidInputError("discount_applied must be set exactly when promotion_id is given")

        menu = self.store.get_menu(menu_id)
        if isinstance(menu, NotFound):
            return menu
        product = self.store.get_product(product_id)
        if isinstance(product, NotFound):
            return product
        if promotion_id is not None:
            promotion = self.store.get_promotion(promotion_id)
            if isinstance(promotion, NotFound):
                return promotion

        menu = menu.value
        item = menu.find_item(product_id)
        if item is None:
            item = PersonalizedMenuItem(product_id=product_id, position=len(menu.items))
            menu.items.append(item)
        item.final_price = round_price(price)
        item.discount_applied = discount_applied
        item.promotion_id = promotion_id

        return Found(self.store.save_menu(menu))

    def remove_item_from_menu(self, menu_id: UUID, product_id: UUID) -> Lookup[PersonalizedMenu]:
        menu = self.store.get_menu(menu_id)
        if isinstance(menu, NotFound):
            return menu

        menu = menu.value
        item = menu.find_item(product_id)
        if item is None:
            return NotFound("menu_item", product_id)

        menu.items.remove(item)
        return Found(self.store.save_menu(menu))

    def delete_menu(self, menu_id: UUID) -> bool:
        menu = self.store.get_menu(menu_id)
        if isinstance(menu, NotFound):
            return False
        self.store.delete_menu(menu.value)
        logger.info(f"Deleted menu {menu_id}")
        return True

    def get_menu(self, menu_id: UUID) -> Lookup[PersonalizedMenu]:
        return self.store.get_menu(menu_id)

    def list_menus(self) -> List[PersonalizedMenu]:
        return self.store.list_menus()

    def get_menus_for_segment(self, segment_id: UUID) -> List[PersonalizedMenu]:
        return self.store.get_menus_for_segment(segment_id)

    def get_latest_menu_for_segment(self, segment_id: UUID) -> Lookup[PersonalizedMenu]:
        return self.store.get_latest_menu_for_segment(segment_id)
