"""
Tests for choosing the promotion to apply.
"""
from decimal import Decimal
from uuid import UUID, uuid4

from menu_service.models.promotion import Promotion
from menu_service.services.promotion_selector import select_promotion


def promo(discount: str, promotion_id: UUID = None) -> Promotion:
    return Promotion(
        id=promotion_id or uuid4(),
        name=f"{discount}% off",
        discount_percent=Decimal(discount),
    )


def test_no_promotions_selects_nothing():
    """Test no promotions selects nothing."""
    assert select_promotion([]) is None


def test_single_promotion_selected():
    """Test single promotion selected."""
    only = promo("5")
    assert select_promotion([only]) is only


def test_highest_discount_wins():
    """Test highest discount wins."""
    ten, twenty_five = promo("10"), promo("25")
    assert select_promotion([ten, twenty_five]) is twenty_five
    assert select_promotion([twenty_five, ten]) is twenty_five


def test_tie_goes_to_smallest_id():
    """Test tie goes to smallest id."""
    first = promo("20", UUID(int=1))
    second = promo("20", UUID(int=2))
    assert select_promotion([second, first]) is first
    assert select_promotion([first, second]) is first


def test_tie_break_only_among_top_discount():
    """Test tie break only among top discount."""
    smaller_id_lower_discount = promo("15", UUID(int=1))
    top = promo("30", UUID(int=9))
    assert select_promotion([smaller_id_lower_discount, top]) is top


def test_accepts_generator():
    """Test any iterable of promotions is accepted."""
    promos = [promo("1"), promo("3"), promo("2")]
    assert select_promotion(p for p in promos).discount_percent == Decimal("3")
