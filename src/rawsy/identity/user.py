"""User aggregate: marketplace account with role, device tokens and wishlist.

Only the parts of a user profile that the negotiation and notification core
reads are modelled here: the role, push device tokens and the wishlist
relation (a set of product ids).
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, List, String

from rawsy.domain import rawsy
from rawsy.shared.auth import Role


def utcnow() -> datetime:
    return datetime.now(UTC)


@rawsy.aggregate(limit=None)
class User:
    name: String(required=True, max_length=200)
    email: String(max_length=254)
    role: String(required=True, choices=Role)
    company_name: String(max_length=200)
    phone: String(max_length=20)
    device_tokens: List(content_type=String(max_length=4096))
    wishlist: List(content_type=String(max_length=50))
    created_at: DateTime(default=utcnow)

    @classmethod
    def register(cls, name, role, email=None, company_name=None, phone=None, user_id=None):
        data = {
            "name": name,
            "role": role.value if isinstance(role, Enum) else role,
            "email": email,
            "company_name": company_name,
            "phone": phone,
        }
        if user_id is not None:
            data["id"] = str(user_id)
        return cls(**data)

    def add_to_wishlist(self, product_id: str) -> bool:
        """Returns False when the product was already on the wishlist."""
        product_id = str(product_id)
        if product_id in self.wishlist:
            return False
        self.wishlist = [*self.wishlist, product_id]
        return True

    def remove_from_wishlist(self, product_id: str) -> bool:
        product_id = str(product_id)
        if product_id not in self.wishlist:
            return False
        self.wishlist = [p for p in self.wishlist if p != product_id]
        return True

    def register_device_token(self, token: str) -> bool:
        if not token or not token.strip():
            raise ValidationError({"device_token": ["Device token cannot be empty"]})
        token = token.strip()
        if token in self.device_tokens:
            return False
        self.device_tokens = [*self.device_tokens, token]
        return True

    def unregister_device_token(self, token: str) -> bool:
        if token not in self.device_tokens:
            return False
        self.device_tokens = [t for t in self.device_tokens if t != token]
        return True
