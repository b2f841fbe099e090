"""
Tests for base price changes and price history.
"""
import pytest
from decimal import Decimal
from uuid import uuid4

from menu_service.core.errors import InvalidInputError
from menu_service.core.results import Found, NotFound
from menu_service.models.catalog import PriceHistory
from menu_service.services.product import ProductService


class TestProductService:

    def test_price_change_is_logged(self, db, make_product):
        """Test price change is logged."""
        product = make_product("Baguette", base_price="3.00")

        result = ProductService(db).update_price(product.id, Decimal("3.40"), reason="Flour cost")

        assert isinstance(result, Found)
        assert result.value.base_price == Decimal("3.40")
        history = db.query(PriceHistory).all()
        assert len(history) == 1
        assert history[0].old_price == Decimal("3.00")
        assert history[0].new_price == Decimal("3.40")
        assert history[0].change_reason == "Flour cost"
        assert history[0].changed_at is not None

    def test_unchanged_price_not_logged(self, db, make_product):
        """Test unchanged price not logged."""
        product = make_product("Brioche", base_price="5.00")

        ProductService(db).update_price(product.id, Decimal("5.00"))

        assert db.query(PriceHistory).count() == 0

    def test_history_is_appended_newest_first(self, db, make_product):
        """Test history is appended newest first."""
        product = make_product("Focaccia", base_price="6.00")
        service = ProductService(db)

        service.update_price(product.id, Decimal("6.50"))
        service.update_price(product.id, Decimal("7.00"))

        history = service.get_price_history(product.id).value
        assert [(h.old_price, h.new_price) for h in history] == [
            (Decimal("6.50"), Decimal("7.00")),
            (Decimal("6.00"), Decimal("6.50")),
        ]

    def test_unknown_product(self, db):
        """Test unknown product returns NotFound for update and history."""
        service = ProductService(db)

        assert isinstance(service.update_price(uuid4(), Decimal("1.00")), NotFound)
        assert isinstance(service.get_price_history(uuid4()), NotFound)

    @pytest.mark.parametrize("price", ["0", "-2.50"])
    def test_non_positive_price_rejected(self, db, make_product, price):
        """Test non positive price rejected."""
        product = make_product("Rye", base_price="4.00")

        with pytest.raises(InvalidInputError):
            ProductService(db).update_price(product.id, Decimal(price))
        assert db.query(PriceHistory).count() == 0


class TestProductsRouter:

    def test_update_price(self, client, make_product):
        """Test price update and its history entry."""
        product = make_product("Ciabatta", base_price="2.00")

        response = client.patch(
            f"/api/products/{product.id}/price",
            json={"new_price": "2.25", "reason": "Seasonal adjustment"},
        )

        assert response.status_code == 200
        assert Decimal(response.json()["base_price"]) == Decimal("2.25")

        history = client.get(f"/api/products/{product.id}/price-history").json()
        assert history["total"] == 1
        assert history["history"][0]["change_reason"] == "Seasonal adjustment"

    def test_update_price_default_reason(self, client, make_product):
        """Test update price default reason."""
        product = make_product("Pita", base_price="1.00")

        client.patch(f"/api/products/{product.id}/price", json={"new_price": "1.10"})

        history = client.get(f"/api/products/{product.id}/price-history").json()
        assert history["history"][0]["change_reason"] == "Manual update"

    def test_update_price_unknown_product(self, client, db):
        """Test update price unknown product."""
        response = client.patch(f"/api/products/{uuid4()}/price", json={"new_price": "1.00"})

        assert response.status_code == 404

    def test_update_price_rejects_zero(self, client, make_product):
        """Test update price rejects zero."""
        product = make_product("Naan", base_price="1.50")

        response = client.patch(f"/api/products/{product.id}/price", json={"new_price": "0"})

        assert response.status_code == 422
