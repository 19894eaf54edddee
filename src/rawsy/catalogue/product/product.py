"""Product aggregate root with Discount and Rating value objects."""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from rawsy.catalogue.product.observer import ProductState
from rawsy.domain import rawsy

# Fields a supplier may change through a product update
UPDATABLE_FIELDS = ("name", "description", "category", "price", "unit", "stock", "negotiable")


def utcnow() -> datetime:
    return datetime.now(UTC)


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@rawsy.value_object(part_of="Product")
class Discount:
    """Percentage discount; only counts towards the final price while active."""

    percentage: Float(default=0.0, min_value=0.0, max_value=100.0)
    active: Boolean(default=False)
    expires_at: DateTime()


@rawsy.value_object(part_of="Product")
class Rating:
    """Running average of buyer ratings."""

    average: Float(default=0.0, min_value=0.0, max_value=5.0)
    count: Integer(default=0, min_value=0)

    def add(self, score: int) -> "Rating":
        count = self.count + 1
        average = (self.average * self.count + score) / count
        return Rating(average=round(average, 2), count=count)


@rawsy.aggregate(limit=None)
class Product:
    """A supplier's listing; written only by its owner or an admin."""

    supplier_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    description: Text()
    category: String(required=True, max_length=100)
    price: Float(required=True)
    unit: String(required=True, max_length=20)  # kg, ton, liter, ...
    stock: Integer(required=True, min_value=0)
    negotiable: Boolean(default=False)
    discount: ValueObject(Discount)
    rating: ValueObject(Rating)
    image: String(max_length=500)
    status: String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than 0"]})

    @property
    def final_price(self) -> float:
        discount = self.discount
        if discount is not None and discount.active and discount.percentage > 0:
            return self.price - (self.price * discount.percentage) / 100
        return self.price

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value

    @classmethod
    def create(
        cls,
        supplier_id,
        name,
        category,
        price,
        unit,
        stock,
        description=None,
        negotiable=False,
        image=None,
    ):
        now = utcnow()
        return cls(
            supplier_id=str(supplier_id),
            name=name,
            category=category,
            price=price,
            unit=unit,
            stock=stock,
            description=description,
            negotiable=bool(negotiable),
            image=image,
            discount=Discount(),
            rating=Rating(),
            created_at=now,
            updated_at=now,
        )

    def state(self) -> ProductState:
        """The terms the mutation observer compares before and after an update."""
        return ProductState(product_id=self.id, name=self.name, price=self.price, stock=self.stock)

    def update_details(self, **changes) -> None:
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(unknown)})

        changes = {field: value for field, value in changes.items() if value is not None}
        if not changes:
            return

        previous = {field: getattr(self, field) for field in changes}

        # A bad field rolls every change back so nothing is left half-applied
        try:
            with atomic_change(self):
                errors: dict[str, list[str]] = {}
                for field, value in changes.items():
                    try:
                        setattr(self, field, value)
                    except ValidationError as exc:
                        for key, messages in exc.messages.items():
                            errors.setdefault(key, []).extend(messages)
                if errors:
                    raise ValidationError(errors)
                self.updated_at = utcnow()
        except ValidationError:
            with atomic_change(self):
                for field, value in previous.items():
                    setattr(self, field, value)
            raise

    def start_discount(self, percentage: float, expires_at: datetime | None = None) -> None:
        from rawsy.catalogue.product.events import ProductDiscountStarted

        if percentage is None or percentage <= 0 or percentage >= 100:
            raise ValidationError({"percentage": ["Discount percentage must be between 0 and 100"]})
        if expires_at is not None and expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at is not None and expires_at <= utcnow():
            raise ValidationError({"expires_at": ["Discount expiry must be in the future"]})

        self.discount = Discount(percentage=percentage, active=True, expires_at=expires_at)
        self.updated_at = utcnow()

        self.raise_(
            ProductDiscountStarted(
                product_id=self.id,
                product_name=self.name,
                percentage=percentage,
                final_price=self.final_price,
            )
        )

    def end_discount(self) -> None:
        if self.discount is None or not self.discount.active:
            raise ValidationError({"discount": ["Product has no active discount"]})
        self.discount = Discount()
        self.updated_at = utcnow()

    def rate(self, score: int) -> None:
        if not isinstance(score, int) or isinstance(score, bool) or not 1 <= score <= 5:
            raise ValidationError({"score": ["Rating must be an integer between 1 and 5"]})
        self.rating = (self.rating or Rating()).add(score)
