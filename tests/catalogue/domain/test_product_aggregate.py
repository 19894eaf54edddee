"""Tests for the Product aggregate: creation, updates, discounts and ratings."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from rawsy.catalogue.product.events import ProductDiscountStarted
from rawsy.catalogue.product.product import Discount, Product, ProductStatus, Rating


def _make_product(**overrides):
    defaults = {
        "supplier_id": "supplier-001",
        "name": "Sorghum",
        "category": "grains",
        "price": 100.0,
        "unit": "ton",
        "stock": 20,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_product(self):
        product = _make_product(description="Red sorghum", negotiable=True)
        assert product.id is not None
        assert product.supplier_id == "supplier-001"
        assert product.status == ProductStatus.ACTIVE.value
        assert product.negotiable is True
        assert product.discount == Discount()
        assert product.rating == Rating()

    @pytest.mark.parametrize(
        "field, value",
        [("price", 0), ("price", -1), ("stock", -5), ("name", ""), ("unit", "")],
    )
    def test_invalid_values_raise_validation_error(self, field, value):
        with pytest.raises(ValidationError) as exc:
            _make_product(**{field: value})
        assert field in exc.value.messages

    def test_state_exposes_price_and_stock(self):
        product = _make_product()
        state = product.state()
        assert state.product_id == product.id
        assert state.price == 100.0
        assert state.stock == 20


class TestUpdateDetails:
    def test_update_changes_fields(self):
        product = _make_product()
        product.update_details(price=80.0, stock=0, negotiable=True)
        assert product.price == 80.0
        assert product.stock == 0
        assert product.negotiable is True

    def test_none_values_are_ignored(self):
        product = _make_product()
        product.update_details(price=None, name="Sorghum Grade A")
        assert product.price == 100.0
        assert product.name == "Sorghum Grade A"

    def test_unknown_field_is_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError) as exc:
            product.update_details(supplier_id="someone-else")
        assert "supplier_id" in exc.value.messages
        assert product.supplier_id == "supplier-001"

    def test_invalid_value_leaves_product_untouched(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update_details(name="Sorghum Premium", price=-3)
        assert product.name == "Sorghum"
        assert product.price == 100.0


class TestDiscount:
    def test_start_discount_updates_final_price(self):
        product = _make_product()
        product.start_discount(25)
        assert product.discount.active is True
        assert product.final_price == 75.0

    def test_start_discount_raises_event(self):
        product = _make_product()
        product.start_discount(10)
        (event,) = product._events
        assert isinstance(event, ProductDiscountStarted)
        assert event.percentage == 10
        assert event.final_price == 90.0
        assert event.product_name == "Sorghum"

    @pytest.mark.parametrize("percentage", [0, 100, -5, 150])
    def test_percentage_out_of_range(self, percentage):
        with pytest.raises(ValidationError):
            _make_product().start_discount(percentage)

    def test_expiry_must_be_in_the_future(self):
        with pytest.raises(ValidationError):
            _make_product().start_discount(10, datetime.now(UTC) - timedelta(days=1))

    def test_naive_expiry_is_treated_as_utc(self):
        product = _make_product()
        product.start_discount(10, datetime.now(UTC).replace(tzinfo=None) + timedelta(days=2))
        assert product.discount.expires_at.tzinfo is not None

    def test_end_discount_restores_price(self):
        product = _make_product()
        product.start_discount(20)
        product.end_discount()
        assert product.discount.active is False
        assert product.final_price == 100.0

    def test_end_discount_without_active_discount_fails(self):
        with pytest.raises(ValidationError):
            _make_product().end_discount()


class TestRating:
    def test_running_average(self):
        product = _make_product()
        product.rate(5)
        product.rate(4)
        product.rate(3)
        assert product.rating.count == 3
        assert product.rating.average == 4.0

    @pytest.mark.parametrize("score", [0, 6, 3.5, True])
    def test_score_must_be_integer_between_1_and_5(self, score):
        with pytest.raises(ValidationError):
            _make_product().rate(score)


class TestPersistence:
    def test_repository_round_trip_keeps_discount_and_rating(self):
        product = _make_product()
        product.start_discount(10)
        product.rate(4)
        current_domain.repository_for(Product).add(product)

        restored = current_domain.repository_for(Product).get(product.id)
        assert restored.discount == product.discount
        assert restored.rating == product.rating
        assert restored.final_price == 90.0

    def test_version_advances_on_each_write(self):
        repo = current_domain.repository_for(Product)
        product = _make_product()
        repo.add(product)

        loaded = repo.get(product.id)
        loaded.update_details(stock=30)
        repo.add(loaded)

        assert repo.get(product.id)._version == loaded._version == product._version + 1

    def test_inactive_status_is_reported(self):
        product = _make_product()
        assert product.is_active is True
        product.status = ProductStatus.INACTIVE.value
        assert product.is_active is False
