"""Persistence tests against the SQLite provider."""

import pytest
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain
from rawsy.catalogue.product.product import Product
from rawsy.domain import rawsy, use_database
from rawsy.negotiation.quote.quote import Party, Quote, QuoteAction
from rawsy.shared.exceptions import ConflictError, NotFoundError, persistence_errors
from rawsy.utils.db import drop_db, setup_db


@pytest.fixture()
def sqlite_database(tmp_path):
    use_database(f"sqlite:///{tmp_path / 'rawsy.db'}")
    setup_db(rawsy)
    yield
    drop_db(rawsy)
    use_database(None)


def _product(**overrides):
    defaults = {
        "supplier_id": "supplier-001",
        "name": "Shea Butter",
        "category": "oils",
        "price": 80.0,
        "unit": "kg",
        "stock": 0,
        "negotiable": True,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


@pytest.mark.usefixtures("sqlite_database")
class TestSQLiteRoundTrip:
    def test_provider_is_sqlite(self):
        assert current_domain.providers["default"].conn_info["provider"] == "sqlite"

    def test_product_value_objects_survive(self):
        product = _product()
        product.start_discount(25)
        product.rate(4)
        current_domain.repository_for(Product).add(product)

        restored = current_domain.repository_for(Product).get(product.id)
        assert restored.discount.percentage == 25
        assert restored.rating.count == 1
        assert restored.final_price == 60.0

    def test_quote_history_survives(self):
        quote = Quote.request(_product(), buyer_id="buyer-001", quantity=10)
        quote.transition(QuoteAction.COUNTER, "supplier-001", {Party.SUPPLIER}, counter_price=70.0)
        current_domain.repository_for(Quote).add(quote)

        restored = current_domain.repository_for(Quote).get(quote.id)
        assert restored.product_snapshot == quote.product_snapshot
        assert [(h.from_status, h.to_status) for h in restored.history] == [("pending", "supplier_counter")]
        assert restored.counter_price == 70.0

    def test_supplier_listing(self):
        repo = current_domain.repository_for(Product)
        mine = _product()
        repo.add(mine)
        repo.add(_product(supplier_id="supplier-002"))

        assert [p.id for p in repo.by_supplier("supplier-001")] == [mine.id]

    def test_stale_write_is_rejected(self):
        repo = current_domain.repository_for(Product)
        product = _product()
        repo.add(product)

        fresh = repo.get(product.id)
        stale = repo.get(product.id)
        fresh.update_details(price=70.0)
        repo.add(fresh)

        stale.update_details(price=60.0)
        with pytest.raises(ExpectedVersionError):
            repo.add(stale)
        assert repo.get(product.id).price == 70.0

    def test_missing_row_maps_to_not_found(self):
        with pytest.raises(NotFoundError):
            with persistence_errors(Product, "missing"):
                current_domain.repository_for(Product).get("missing")

    def test_conflict_maps_through_persistence_errors(self):
        repo = current_domain.repository_for(Product)
        product = _product()
        repo.add(product)
        stale = repo.get(product.id)
        fresh = repo.get(product.id)
        fresh.update_details(stock=3)
        repo.add(fresh)

        stale.update_details(stock=5)
        with pytest.raises(ConflictError):
            with persistence_errors(Product, product.id):
                repo.add(stale)
