"""
Customer segments and per-segment product demand metrics.
"""
import uuid
from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship

from menu_service.db.base import Base


class Segment(Base):
    """A named customer cohort. Referenced by generated menus."""
    __tablename__ = "segments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, server_default=func.now())


class ProductDemandMetric(Base):
    """Demand strength of one product within one segment, recomputed upstream."""
    __tablename__ = "product_demand_metrics"

    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    segment_id = Column(Uuid, ForeignKey("segments.id", ondelete="CASCADE"), primary_key=True)
    lift_factor = Column(Numeric(8, 4), nullable=False)  # Ranking key, higher first
    redemption_rate = Column(Numeric(5, 4))
    price_elasticity = Column(Numeric(6, 3), nullable=False)  # Typical range: 0.0 - 4.0
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    product = relationship("Product", lazy="joined")

    __table_args__ = (
        Index("idx_demand_metrics_segment_lift", "segment_id", "lift_factor"),
    )
