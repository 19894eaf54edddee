"""Actor context and capability checks.

Authentication happens upstream. Every core operation receives an explicit
``Actor`` and asks ``require()`` for the coarse capability it needs; fine-grained
ownership (is this actor party to this quote, does this supplier own this
product) is checked by the aggregates' callers with the helpers below.
"""

from dataclasses import dataclass
from enum import Enum

from rawsy.shared.exceptions import ForbiddenError, ValidationError


class Role(Enum):
    BUYER = "buyer"
    SUPPLIER = "supplier"
    ADMIN = "admin"


class Capability(Enum):
    MANAGE_PRODUCTS = "manage_products"
    REQUEST_QUOTE = "request_quote"
    RATE_PRODUCT = "rate_product"
    NEGOTIATE_QUOTE = "negotiate_quote"
    VIEW_ALL = "view_all"


_ROLE_CAPABILITIES = {
    Role.BUYER: {Capability.REQUEST_QUOTE, Capability.RATE_PRODUCT, Capability.NEGOTIATE_QUOTE},
    Role.SUPPLIER: {Capability.MANAGE_PRODUCTS, Capability.NEGOTIATE_QUOTE},
    Role.ADMIN: {Capability.MANAGE_PRODUCTS, Capability.NEGOTIATE_QUOTE, Capability.VIEW_ALL},
}


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a core operation."""

    user_id: str
    role: Role

    @classmethod
    def of(cls, user_id: str, role: "Role | str") -> "Actor":
        if not user_id:
            raise ValidationError({"user_id": ["Actor user id is required"]})
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError({"role": [f"Unknown role '{role}'"]}) from None
        return cls(user_id=str(user_id), role=role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def can(actor: Actor, capability: Capability) -> bool:
    return capability in _ROLE_CAPABILITIES.get(actor.role, set())


def require(actor: Actor, capability: Capability) -> None:
    """Raise ``ForbiddenError`` unless the actor's role grants ``capability``."""
    if not can(actor, capability):
        raise ForbiddenError(
            {"role": [f"Role '{actor.role.value}' is not allowed to {capability.value.replace('_', ' ')}"]}
        )


def require_owner(actor: Actor, owner_id: str, entity: str = "resource") -> None:
    """Only the owner (or an admin) may write to an entity."""
    if actor.is_admin:
        return
    if str(owner_id) != actor.user_id:
        raise ForbiddenError({"_entity": [f"You cannot modify this {entity}"]})
