"""
SQLAlchemy models for the menu service.
"""
# Catalog
from menu_service.models.catalog import Category, Product, PriceHistory

# Segments & demand
from menu_service.models.segment import Segment, ProductDemandMetric

# Promotions
from menu_service.models.promotion import (
    PromotionCategory,
    Promotion,
    GeoPromotion,
    product_promotions,
)

# Personalized menus
from menu_service.models.menu import PersonalizedMenu, PersonalizedMenuItem


__all__ = [
    # Catalog
    "Category",
    "Product",
    "PriceHistory",
    # Segments
    "Segment",
    "ProductDemandMetric",
    # Promotions
    "PromotionCategory",
    "Promotion",
    "GeoPromotion",
    "product_promotions",
    # Menus
    "PersonalizedMenu",
    "PersonalizedMenuItem",
]
