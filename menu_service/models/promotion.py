"""
Promotion models: categories, promotions, eligible products and geo bindings.
"""
import uuid
from sqlalchemy import Column, String, Text, Boolean, Numeric, DateTime, ForeignKey, Table, Uuid, CheckConstraint, func
from sqlalchemy.orm import relationship

from menu_service.db.base import Base


product_promotions = Table(
    "product_promotions",
    Base.metadata,
    Column("promotion_id", Uuid, ForeignKey("promotions.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class PromotionCategory(Base):
    """Grouping for promotions (seasonal, loyalty, clearance, ...)."""
    __tablename__ = "promotion_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text)


class Promotion(Base):
    """Percentage discount on a set of products within a validity window."""
    __tablename__ = "promotions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    promotion_category_id = Column(Uuid, ForeignKey("promotion_categories.id", ondelete="SET NULL"))
    name = Column(String(255), nullable=False)
    description = Column(Text)
    discount_percent = Column(Numeric(5, 2), nullable=False)  # 0 - 100
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    promotion_category = relationship("PromotionCategory")
    products = relationship("Product", secondary=product_promotions)
    geo_promotions = relationship("GeoPromotion", cascade="all, delete-orphan", lazy="selectin")

    __table_args__ = (
        CheckConstraint(
            "discount_percent >= 0 AND discount_percent <= 100",
            name="ck_promotions_discount_range",
        ),
    )


class GeoPromotion(Base):
    """Restricts a promotion to a region, a city, or a radius around a point."""
    __tablename__ = "geo_promotions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    promotion_id = Column(Uuid, ForeignKey("promotions.id", ondelete="CASCADE"), nullable=False, index=True)
    region_code = Column(String(20), nullable=False)
    city = Column(String(100))
    latitude = Column(Numeric(9, 6))
    longitude = Column(Numeric(9, 6))
    radius_km = Column(Numeric(8, 2))
    created_at = Column(DateTime, server_default=func.now())
