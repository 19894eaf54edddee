"""Repository for the User aggregate."""

from rawsy.domain import rawsy
from rawsy.identity.user import User


@rawsy.repository(part_of=User)
class UserRepository:
    def watching(self, product_id: str) -> list[User]:
        """Users with ``product_id`` on their wishlist."""
        # Wishlists are JSON lists; list-membership lookups are not portable across providers
        product_id = str(product_id)
        return [user for user in self.query.all().items if product_id in user.wishlist]
