"""
Pricing policy: promotion discounts and elasticity-driven price adjustments.

All arithmetic is fixed-point `Decimal`; final prices are rounded to cents
with ROUND_HALF_UP.

    dynamic_price:  e > 1  ->  price * (1 - min(0.15, (e - 1) * 0.05))
                    e <= 1 ->  price * (1 + min(0.10, (1 - e) * 0.03))

    optimal_price:  e <= 1 ->  price * (1 + (1 - e) * 0.2)
                    e > 1  ->  price * clamp(e / (e - 1), 0.8, 1.5)
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from menu_service.core.errors import InvalidInputError

Number = Union[Decimal, int, float, str]

CENTS = Decimal("0.01")
MULTIPLIER_PRECISION = Decimal("0.0001")
ONE = Decimal("1")
HUNDRED = Decimal("100")

# dynamic_price
ELASTIC_DISCOUNT_PER_POINT = Decimal("0.05")  # per elasticity point above 1
MAX_ELASTIC_DISCOUNT = Decimal("0.15")
INELASTIC_PREMIUM_PER_POINT = Decimal("0.03")  # per elasticity point below 1
MAX_INELASTIC_PREMIUM = Decimal("0.10")

# optimal_price
INELASTIC_MARKUP_PER_POINT = Decimal("0.2")
MIN_MARKUP_DENOMINATOR = Decimal("0.1")
MIN_OPTIMAL_MARKUP = Decimal("0.8")
MAX_OPTIMAL_MARKUP = Decimal("1.5")


def to_decimal(value: Number, field: str = "value") -> Decimal:
    """Convert to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except ArithmeticError as e:
            raise InvalidInputError(f"{field} is not a number: {value!r}") from e
    if not result.is_finite():
        raise InvalidInputError(f"{field} must be finite, got {value!r}")
    return result


def round_price(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _validated_base_price(base_price: Number) -> Decimal:
    price = to_decimal(base_price, "base_price")
    if price < 0:
        raise InvalidInputError(f"base_price must not be negative, got {price}")
    return price


def discounted_price(base_price: Number, discount_percent: Number) -> Decimal:
    """
    Apply a percentage discount.

    Args:
        base_price: Undiscounted list price (>= 0)
        discount_percent: Discount in percent, e.g. 10 for 10% (0 - 100)

    Returns:
        Discounted price rounded to cents
    """
    price = _validated_base_price(base_price)
    percent = to_decimal(discount_percent, "discount_percent")
    if percent < 0 or percent > HUNDRED:
        raise InvalidInputError(f"discount_percent must be within 0-100, got {percent}")

    fraction = (percent / HUNDRED).quantize(MULTIPLIER_PRECISION, rounding=ROUND_HALF_UP)
    return round_price(price * (ONE - fraction))


def dynamic_price(base_price: Number, elasticity: Number) -> Decimal:
    """
    Adjust price by demand elasticity.

    Elastic demand (e > 1) gets a volume-driving discount of up to 15%;
    inelastic demand (e <= 1) gets a premium of up to 10%. The result always
    stays within [0.85, 1.10] of the base price.
    """
    price = _validated_base_price(base_price)
    e = to_decimal(elasticity, "elasticity")

    if e > ONE:
        discount = min(MAX_ELASTIC_DISCOUNT, (e - ONE) * ELASTIC_DISCOUNT_PER_POINT)
        multiplier = ONE - discount
    else:
        premium = min(MAX_INELASTIC_PREMIUM, (ONE - e) * INELASTIC_PREMIUM_PER_POINT)
        multiplier = ONE + premium

    return round_price(price * multiplier)


def optimal_price(base_price: Number, elasticity: Number) -> Decimal:
    """
    Revenue-maximizing markup heuristic.

    Not used by menu generation. Inelastic demand gets an uncapped markup;
    elastic demand uses the e / (e - 1) markup rule clamped to [0.8, 1.5],
    with the denominator kept at least 0.1 away from zero.
    """
    price = _validated_base_price(base_price)
    e = to_decimal(elasticity, "elasticity")

    if e <= ONE:
        multiplier = ONE + (ONE - e) * INELASTIC_MARKUP_PER_POINT
        return round_price(price * multiplier)

    denominator = e - ONE
    if abs(denominator) < MIN_MARKUP_DENOMINATOR:
        denominator = MIN_MARKUP_DENOMINATOR.copy_sign(denominator)

    markup = (e / denominator).quantize(MULTIPLIER_PRECISION, rounding=ROUND_HALF_UP)
    markup = min(max(markup, MIN_OPTIMAL_MARKUP), MAX_OPTIMAL_MARKUP)
    return round_price(price * markup)
