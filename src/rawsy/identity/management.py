"""User registration, wishlist and device-token management."""

import structlog
from protean.utils.globals import current_domain

from rawsy.identity.user import User
from rawsy.shared.auth import Actor
from rawsy.shared.exceptions import persistence_errors

logger = structlog.get_logger(__name__)


class IdentityService:
    @property
    def users(self):
        return current_domain.repository_for(User)

    def _save(self, user: User) -> User:
        with persistence_errors(User, user.id):
            self.users.add(user)
        return user

    def register_user(self, name, role, email=None, company_name=None, phone=None, user_id=None) -> User:
        user = User.register(
            name=name,
            role=role,
            email=email,
            company_name=company_name,
            phone=phone,
            user_id=user_id,
        )
        self._save(user)
        logger.info("User registered", user_id=user.id, role=user.role)
        return user

    def get_user(self, user_id: str) -> User:
        with persistence_errors(User, user_id):
            return self.users.get(user_id)

    def add_to_wishlist(self, actor: Actor, product_id: str) -> User:
        user = self.get_user(actor.user_id)
        if user.add_to_wishlist(product_id):
            self._save(user)
        return user

    def remove_from_wishlist(self, actor: Actor, product_id: str) -> User:
        user = self.get_user(actor.user_id)
        if user.remove_from_wishlist(product_id):
            self._save(user)
        return user

    def register_device_token(self, actor: Actor, token: str) -> User:
        user = self.get_user(actor.user_id)
        if user.register_device_token(token):
            self._save(user)
        return user

    def unregister_device_token(self, actor: Actor, token: str) -> User:
        user = self.get_user(actor.user_id)
        if user.unregister_device_token(token):
            self._save(user)
        return user
