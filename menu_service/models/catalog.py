"""
Catalog models: categories, products, and base price history.
"""
import uuid
from sqlalchemy import Column, String, Text, Integer, Boolean, Numeric, DateTime, ForeignKey, Uuid, CheckConstraint, func
from sqlalchemy.orm import relationship

from menu_service.db.base import Base


class Category(Base):
    """Product grouping (drinks, pastries, mains, etc.)."""
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, server_default=func.now())


class Product(Base):
    """A product that can appear on a personalized menu."""
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"))
    name = Column(String(255), nullable=False)
    description = Column(Text)
    base_price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    category = relationship("Category")

    __table_args__ = (
        CheckConstraint("base_price > 0", name="ck_products_base_price_positive"),
    )


class PriceHistory(Base):
    """
    Append-only log of base price changes.

    One row per change of `Product.base_price`; rows are never updated.
    """
    __tablename__ = "price_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    old_price = Column(Numeric(10, 2), nullable=False)
    new_price = Column(Numeric(10, 2), nullable=False)
    change_reason = Column(String(255))
    changed_at = Column(DateTime, nullable=False)
