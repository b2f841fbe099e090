"""
Test configuration and fixtures.
"""
import os
import pytest
from datetime import timedelta
from decimal import Decimal
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Set test database URL before importing app
os.environ["DATABASE_URL"] = "sqlite://"

from menu_service.main import app
from menu_service.db.base import Base
from menu_service.db.session import get_db
from menu_service.core.results import utcnow
import menu_service.models  # noqa: F401
from menu_service.models.catalog import Product
from menu_service.models.promotion import GeoPromotion, Promotion
from menu_service.models.segment import ProductDemandMetric, Segment


# In-memory database shared by every connection of the test engine
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh schema and a database session for the test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def segment(db: Session) -> Segment:
    """A customer segment with no demand metrics yet."""
    seg = Segment(name="Morning Commuters", description="Weekday buyers before 9am")
    db.add(seg)
    db.commit()
    db.refresh(seg)
    return seg


@pytest.fixture
def make_product(db: Session):
    """Factory for products."""
    def _make(name: str, base_price: str = "100.00", is_active: bool = True) -> Product:
        product = Product(name=name, base_price=Decimal(base_price), is_active=is_active)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make


@pytest.fixture
def make_metric(db: Session):
    """Factory for demand metrics of a product within a segment."""
    def _make(product: Product, segment: Segment, lift: str, elasticity: str = "1.0") -> ProductDemandMetric:
        metric = ProductDemandMetric(
            product_id=product.id,
            segment_id=segment.id,
            lift_factor=Decimal(lift),
            redemption_rate=Decimal("0.1000"),
            price_elasticity=Decimal(elasticity),
        )
        db.add(metric)
        db.commit()
        return metric
    return _make


@pytest.fixture
def make_promotion(db: Session):
    """Factory for promotions valid around now unless told otherwise."""
    def _make(
        products,
        discount: str,
        name: str = "Promo",
        is_active: bool = True,
        starts_in: timedelta = timedelta(days=-1),
        ends_in: timedelta = timedelta(days=1),
        promotion_id=None,
        geo: list = None,
    ) -> Promotion:
        now = utcnow()
        promo = Promotion(
            name=name,
            discount_percent=Decimal(discount),
            start_date=now + starts_in,
            end_date=now + ends_in,
            is_active=is_active,
        )
        if promotion_id is not None:
            promo.id = promotion_id
        promo.products = list(products)
        for binding in geo or []:
            promo.geo_promotions.append(GeoPromotion(**binding))
        db.add(promo)
        db.commit()
        db.refresh(promo)
        return promo
    return _make
