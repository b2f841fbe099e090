"""
Personalized menus router.

Provides endpoints for generating menus per segment, reading menu history,
and adding/removing individual menu items.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from menu_service.core.deps import found_or_404, get_menu_generator
from menu_service.schemas.menu import (
    MenuGenerateRequest,
    MenuItemCreate,
    MenuListResponse,
    MenuResponse,
)
from menu_service.services.geo import MenuLocation
from menu_service.services.menu_generator import MenuGenerator

router = APIRouter(prefix="/menus", tags=["menus"])


@router.get("", response_model=MenuListResponse)
def list_menus(generator: MenuGenerator = Depends(get_menu_generator)):
    """List all generated menus, newest first."""
    menus = generator.list_menus()
    return MenuListResponse(
        menus=[MenuResponse.model_validate(m) for m in menus],
        total=len(menus)
    )


@router.post("/generate", response_model=MenuResponse, status_code=status.HTTP_201_CREATED)
def generate_menu(
    request: MenuGenerateRequest,
    generator: MenuGenerator = Depends(get_menu_generator),
):
    """
    Generate a new personalized menu for a segment.

    Location fields are optional and only matter for geo-targeted promotions.
    """
    location = None
    if any(v is not None for v in (request.region_code, request.city, request.latitude, request.longitude)):
        location = MenuLocation(
            region_code=request.region_code,
            city=request.city,
            latitude=request.latitude,
            longitude=request.longitude,
        )

    menu = found_or_404(generator.generate_menu_for_segment(request.segment_id, location))
    return MenuResponse.model_validate(menu)


@router.get("/segment/{segment_id}", response_model=MenuListResponse)
def get_menus_for_segment(
    segment_id: UUID,
    generator: MenuGenerator = Depends(get_menu_generator),
):
    """All menus generated for a segment, newest first."""
    menus = generator.get_menus_for_segment(segment_id)
    return MenuListResponse(
        menus=[MenuResponse.model_validate(m) for m in menus],
        total=len(menus)
    )


@router.get("/segment/{segment_id}/latest", response_model=MenuResponse)
def get_latest_menu_for_segment(
    segment_id: UUID,
    generator: MenuGenerator = Depends(get_menu_generator),
):
    """Most recently generated menu for a segment (by generation time)."""
    menu = found_or_404(generator.get_latest_menu_for_segment(segment_id))
    return MenuResponse.model_validate(menu)


@router.get("/{menu_id}", response_model=MenuResponse)
def get_menu(menu_id: UUID, generator: MenuGenerator = Depends(get_menu_generator)):
    menu = found_or_404(generator.get_menu(menu_id))
    return MenuResponse.model_validate(menu)


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu(menu_id: UUID, generator: MenuGenerator = Depends(get_menu_generator)):
    """Delete a menu together with all of its items."""
    if not generator.delete_menu(menu_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Menu not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{menu_id}/items", response_model=MenuResponse)
def add_item_to_menu(
    menu_id: UUID,
    item: MenuItemCreate,
    generator: MenuGenerator = Depends(get_menu_generator),
):
    """
    Add a product to a menu at a caller-supplied price.

    An existing item for the same product is replaced.
    """
    menu = found_or_404(generator.add_item_to_menu(
        menu_id=menu_id,
        product_id=item.product_id,
        final_price=item.final_price,
        discount_applied=item.discount_applied,
        promotion_id=item.promotion_id,
    ))
    return MenuResponse.model_validate(menu)


@router.delete("/{menu_id}/items/{product_id}", response_model=MenuResponse)
def remove_item_from_menu(
    menu_id: UUID,
    product_id: UUID,
    generator: MenuGenerator = Depends(get_menu_generator),
):
    menu = found_or_404(generator.remove_item_from_menu(menu_id, product_id))
    return MenuResponse.model_validate(menu)
