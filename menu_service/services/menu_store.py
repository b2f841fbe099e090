"""
Store interface used by menu generation, and its SQLAlchemy implementation.
"""
import logging
from datetime import datetime
from typing import List, Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from menu_service.core.errors import (
    DeadlineExceededError,
    PersistenceError,
    UpstreamUnavailableError,
    is_statement_timeout,
)
from menu_service.core.results import Found, Lookup, NotFound
from menu_service.models.catalog import Product
from menu_service.models.menu import PersonalizedMenu
from menu_service.models.promotion import Promotion, product_promotions
from menu_service.models.segment import ProductDemandMetric, Segment

logger = logging.getLogger(__name__)


class MenuStore(Protocol):
    """Lookups and writes the menu generator depends on."""

    def get_segment(self, segment_id: UUID) -> Lookup[Segment]: ...

    def get_ranked_demand_metrics(self, segment_id: UUID) -> List[ProductDemandMetric]: ...

    def get_active_promotions_for_product(self, product_id: UUID, now: datetime) -> List[Promotion]: ...

    def get_product(self, product_id: UUID) -> Lookup[Product]: ...

    def get_promotion(self, promotion_id: UUID) -> Lookup[Promotion]: ...

    def get_menu(self, menu_id: UUID) -> Lookup[PersonalizedMenu]: ...

    def list_menus(self) -> List[PersonalizedMenu]: ...

    def get_menus_for_segment(self, segment_id: UUID) -> List[PersonalizedMenu]: ...

    def get_latest_menu_for_segment(self, segment_id: UUID) -> Lookup[PersonalizedMenu]: ...

    def save_menu(self, menu: PersonalizedMenu) -> PersonalizedMenu: ...

    def delete_menu(self, menu: PersonalizedMenu) -> None: ...


class SqlMenuStore:
    """
    MenuStore backed by a SQLAlchemy session.

    Reads failing with a database error surface as UpstreamUnavailableError;
    writes commit once and roll back entirely on failure. A statement cancelled
    by the database timeout surfaces as DeadlineExceededError either way.
    """

    def __init__(self, db: Session):
        self.db = db

    def _fetch(self, what: str, stmt):
        try:
            return self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to load {what}: {e}", exc_info=True)
            if is_statement_timeout(e):
                raise DeadlineExceededError(f"Timed out loading {what}") from e
            raise UpstreamUnavailableError(f"Could not load {what}") from e

    def _get(self, model, entity: str, ident: UUID) -> Lookup:
        stmt = select(model).where(model.id == ident)
        obj = self._fetch(entity, stmt).scalars().first()
        if obj is None:
            return NotFound(entity, ident)
        return Found(obj)

    def get_segment(self, segment_id: UUID) -> Lookup[Segment]:
        return self._get(Segment, "segment", segment_id)

    def get_product(self, product_id: UUID) -> Lookup[Product]:
        return self._get(Product, "product", product_id)

    def get_promotion(self, promotion_id: UUID) -> Lookup[Promotion]:
        return self._get(Promotion, "promotion", promotion_id)

    def get_menu(self, menu_id: UUID) -> Lookup[PersonalizedMenu]:
        return self._get(PersonalizedMenu, "menu", menu_id)

    def get_ranked_demand_metrics(self, segment_id: UUID) -> List[ProductDemandMetric]:
        stmt = (
            select(ProductDemandMetric)
            .where(ProductDemandMetric.segment_id == segment_id)
            .order_by(ProductDemandMetric.lift_factor.desc())
        )
        return list(self._fetch("demand metrics", stmt).unique().scalars().all())

    def get_active_promotions_for_product(self, product_id: UUID, now: datetime) -> List[Promotion]:
        stmt = (
            select(Promotion)
            .join(product_promotions, product_promotions.c.promotion_id == Promotion.id)
            .where(
                product_promotions.c.product_id == product_id,
                Promotion.is_active == True,
                Promotion.start_date <= now,
                Promotion.end_date >= now,
            )
        )
        return list(self._fetch("promotions", stmt).scalars().all())

    def list_menus(self) -> List[PersonalizedMenu]:
        stmt = select(PersonalizedMenu).order_by(
            PersonalizedMenu.generated_at.desc(), PersonalizedMenu.id.desc()
        )
        return list(self._fetch("menus", stmt).scalars().all())

    def get_menus_for_segment(self, segment_id: UUID) -> List[PersonalizedMenu]:
        stmt = (
            select(PersonalizedMenu)
            .where(PersonalizedMenu.segment_id == segment_id)
            .order_by(PersonalizedMenu.generated_at.desc(), PersonalizedMenu.id.desc())
        )
        return list(self._fetch("menus", stmt).scalars().all())

    def get_latest_menu_for_segment(self, segment_id: UUID) -> Lookup[PersonalizedMenu]:
        stmt = (
            select(PersonalizedMenu)
            .where(PersonalizedMenu.segment_id == segment_id)
            .order_by(PersonalizedMenu.generated_at.desc(), PersonalizedMenu.id.desc())
            .limit(1)
        )
        menu = self._fetch("menus", stmt).scalars().first()
        if menu is None:
            return NotFound("menu")
        return Found(menu)

    def save_menu(self, menu: PersonalizedMenu) -> PersonalizedMenu:
        try:
            self.db.add(menu)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save menu {menu.id}: {e}", exc_info=True)
            if is_statement_timeout(e):
                raise DeadlineExceededError(f"Timed out saving menu {menu.id}") from e
            raise PersistenceError(f"Could not save menu {menu.id}") from e
        self.db.refresh(menu)
        return menu

    def delete_menu(self, menu: PersonalizedMenu) -> None:
        try:
            self.db.delete(menu)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete menu {menu.id}: {e}", exc_info=True)
            if is_statement_timeout(e):
                raise DeadlineExceededError(f"Timed out deleting menu {menu.id}") from e
            raise PersistenceError(f"Could not delete menu {menu.id}") from e
