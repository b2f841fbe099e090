"""
Choose which of a product's active promotions to apply.
"""
from typing import Iterable, Optional

from menu_service.models.promotion import Promotion


def select_promotion(promotions: Iterable[Promotion]) -> Optional[Promotion]:
    """
    Pick the promotion with the greatest discount.

    Promotions sharing the top discount are ordered by id and the smallest
    id wins, so the result does not depend on query order.

    Args:
        promotions: Currently active promotions that include the product

    Returns:
        The winning promotion, or None when there is nothing to apply
    """
    best: Optional[Promotion] = None
    for promo in promotions:
        if best is None:
            best = promo
        elif promo.discount_percent > best.discount_percent:
            best = promo
        elif promo.discount_percent == best.discount_percent and promo.id < best.id:
            best = promo
    return best
