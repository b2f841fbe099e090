"""
Personalized menus and their items.
"""
import uuid
from sqlalchemy import Column, Boolean, Integer, Numeric, DateTime, ForeignKey, Index, Uuid, CheckConstraint
from sqlalchemy.orm import relationship

from menu_service.db.base import Base


class PersonalizedMenu(Base):
    """
    A menu generated for one segment at one point in time.

    Every generation creates a new row, so a segment keeps its menu history.
    The menu owns its items: deleting it deletes them.
    """
    __tablename__ = "personalized_menus"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    segment_id = Column(Uuid, ForeignKey("segments.id", ondelete="RESTRICT"), nullable=False)
    generated_at = Column(DateTime, nullable=False)

    items = relationship(
        "PersonalizedMenuItem",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PersonalizedMenuItem.position",
    )

    __table_args__ = (
        Index("idx_personalized_menus_segment_generated", "segment_id", "generated_at"),
    )

    def find_item(self, product_id: uuid.UUID):
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None


class PersonalizedMenuItem(Base):
    """A priced product on a menu. discount_applied is set iff promotion_id is."""
    __tablename__ = "personalized_menu_items"

    menu_id = Column(Uuid, ForeignKey("personalized_menus.id", ondelete="CASCADE"), primary_key=True)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    final_price = Column(Numeric(10, 2), nullable=False)
    discount_applied = Column(Boolean, default=False, nullable=False)
    promotion_id = Column(Uuid, ForeignKey("promotions.id"), nullable=True)
    position = Column(Integer, nullable=False, default=0)  # Rank order at generation

    __table_args__ = (
        CheckConstraint(
            "(discount_applied AND promotion_id IS NOT NULL) OR (NOT discount_applied AND promotion_id IS NULL)",
            name="ck_menu_items_discount_promotion",
        ),
    )
