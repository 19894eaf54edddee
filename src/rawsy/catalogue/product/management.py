"""Product management: supplier-facing operations on the catalogue.

Updates capture the product's price and stock immediately before the change and
hand the before and after states to the mutation observer, which raises change
events on the product. The events dispatch to the Notifications context only
after the versioned write commits; notification failures never affect the
result of the update.
"""

from datetime import datetime

import structlog
from protean.utils.globals import current_domain

from rawsy.catalogue.product.observer import ProductMutationObserver
from rawsy.catalogue.product.product import Product
from rawsy.catalogue.product.search import SearchCriteria, SearchResult, search_products, top_rated
from rawsy.shared.auth import Actor, Capability, require, require_owner
from rawsy.shared.exceptions import persistence_errors

logger = structlog.get_logger(__name__)


class CatalogueService:
    def __init__(self, observer: ProductMutationObserver | None = None) -> None:
        self.observer = observer or ProductMutationObserver()

    @property
    def products(self):
        return current_domain.repository_for(Product)

    def _load(self, product_id: str) -> Product:
        with persistence_errors(Product, product_id):
            return self.products.get(product_id)

    def _save(self, product: Product) -> Product:
        with persistence_errors(Product, product.id):
            self.products.add(product)
        return product

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def create_product(
        self,
        actor: Actor,
        name,
        category,
        price,
        unit,
        stock,
        description=None,
        negotiable=False,
        image=None,
    ) -> Product:
        require(actor, Capability.MANAGE_PRODUCTS)
        product = Product.create(
            supplier_id=actor.user_id,
            name=name,
            category=category,
            price=price,
            unit=unit,
            stock=stock,
            description=description,
            negotiable=negotiable,
            image=image,
        )
        self._save(product)
        logger.info("Product created", product_id=product.id, supplier_id=actor.user_id)
        return product

    def update_product(self, actor: Actor, product_id: str, **changes) -> Product:
        require(actor, Capability.MANAGE_PRODUCTS)
        product = self._load(product_id)
        require_owner(actor, product.supplier_id, "product")

        before = product.state()
        product.update_details(**changes)
        self.observer.on_product_updated(before, product)
        return self._save(product)

    def delete_product(self, actor: Actor, product_id: str) -> None:
        require(actor, Capability.MANAGE_PRODUCTS)
        product = self._load(product_id)
        require_owner(actor, product.supplier_id, "product")
        with persistence_errors(Product, product_id):
            self.products.remove(product)
        logger.info("Product deleted", product_id=product_id, actor_id=actor.user_id)

    def start_discount(
        self, actor: Actor, product_id: str, percentage: float, expires_at: datetime | None = None
    ) -> Product:
        require(actor, Capability.MANAGE_PRODUCTS)
        product = self._load(product_id)
        require_owner(actor, product.supplier_id, "product")
        product.start_discount(percentage, expires_at)
        return self._save(product)

    def end_discount(self, actor: Actor, product_id: str) -> Product:
        require(actor, Capability.MANAGE_PRODUCTS)
        product = self._load(product_id)
        require_owner(actor, product.supplier_id, "product")
        product.end_discount()
        return self._save(product)

    def rate_product(self, actor: Actor, product_id: str, score: int) -> Product:
        require(actor, Capability.RATE_PRODUCT)
        product = self._load(product_id)
        product.rate(score)
        return self._save(product)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_product(self, product_id: str) -> Product:
        return self._load(product_id)

    def list_products(self) -> list[Product]:
        with persistence_errors(Product):
            return self.products.all()

    def list_supplier_products(self, actor: Actor) -> list[Product]:
        with persistence_errors(Product):
            return self.products.by_supplier(actor.user_id)

    def search(self, criteria: SearchCriteria) -> SearchResult:
        return search_products(self.list_products(), criteria)

    def top_rated(self, limit: int = 10) -> list[Product]:
        return top_rated(self.list_products(), limit)
