"""Repository for the Product aggregate."""

from rawsy.catalogue.product.product import Product
from rawsy.domain import rawsy


@rawsy.repository(part_of=Product)
class ProductRepository:
    def all(self) -> list[Product]:
        return self.query.all().items

    def by_supplier(self, supplier_id: str) -> list[Product]:
        """Products listed by one supplier."""
        return self.query.filter(supplier_id=supplier_id).all().items

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
