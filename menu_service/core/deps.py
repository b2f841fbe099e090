"""
Shared FastAPI dependencies and helpers for routers.
"""
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from menu_service.core.config import Settings, get_settings
from menu_service.core.results import Lookup, NotFound
from menu_service.db.session import get_db
from menu_service.services.menu_generator import MenuGenerationConfig, MenuGenerator
from menu_service.services.menu_store import SqlMenuStore


def get_menu_generator(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MenuGenerator:
    """Generator bound to the request's session and the configured feature flags."""
    return MenuGenerator(SqlMenuStore(db), MenuGenerationConfig.from_settings(settings))


def found_or_404(result: Lookup):
    """Unwrap a lookup result, raise 404 if not found."""
    if isinstance(result, NotFound):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=result.message
        )
    return result.value
