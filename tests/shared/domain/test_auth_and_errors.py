"""Tests for actors, capability checks and the error taxonomy."""

import pydantic
import pytest
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, TransactionError
from rawsy.shared.auth import Actor, Capability, Role, can, require, require_owner
from rawsy.shared.exceptions import (
    ConflictError,
    DependencyError,
    ForbiddenError,
    InvalidTransition,
    MarketplaceError,
    NotFoundError,
    ValidationError,
    persistence_errors,
    validation_errors,
)


class TestActor:
    def test_of_parses_role(self):
        actor = Actor.of("u-1", "supplier")
        assert actor.role == Role.SUPPLIER
        assert not actor.is_admin

    def test_unknown_role(self):
        with pytest.raises(ValidationError) as exc:
            Actor.of("u-1", "superuser")
        assert "role" in exc.value.messages

    def test_missing_user_id(self):
        with pytest.raises(ValidationError):
            Actor.of("", "buyer")


class TestCapabilities:
    @pytest.mark.parametrize(
        "role, capability, expected",
        [
            (Role.BUYER, Capability.REQUEST_QUOTE, True),
            (Role.BUYER, Capability.RATE_PRODUCT, True),
            (Role.BUYER, Capability.MANAGE_PRODUCTS, False),
            (Role.SUPPLIER, Capability.MANAGE_PRODUCTS, True),
            (Role.SUPPLIER, Capability.REQUEST_QUOTE, False),
            (Role.SUPPLIER, Capability.NEGOTIATE_QUOTE, True),
            (Role.ADMIN, Capability.MANAGE_PRODUCTS, True),
            (Role.ADMIN, Capability.VIEW_ALL, True),
            (Role.ADMIN, Capability.REQUEST_QUOTE, False),
        ],
    )
    def test_role_capabilities(self, role, capability, expected):
        assert can(Actor("u-1", role), capability) is expected

    def test_require_raises_forbidden(self):
        with pytest.raises(ForbiddenError) as exc:
            require(Actor("u-1", Role.BUYER), Capability.MANAGE_PRODUCTS)
        assert exc.value.messages == {"role": ["Role 'buyer' is not allowed to manage products"]}

    def test_require_owner(self):
        require_owner(Actor("u-1", Role.SUPPLIER), "u-1", "product")
        require_owner(Actor("admin", Role.ADMIN), "u-1", "product")
        with pytest.raises(ForbiddenError):
            require_owner(Actor("u-2", Role.SUPPLIER), "u-1", "product")


class TestErrors:
    def test_string_message_becomes_entity_error(self):
        assert MarketplaceError("broken").messages == {"_entity": ["broken"]}

    def test_invalid_transition_carries_context(self):
        exc = InvalidTransition("converted", "cancel")
        assert exc.current_status == "converted"
        assert exc.action == "cancel"
        assert exc.code == "invalid_transition"
        assert "converted" in exc.messages["status"][0]

    def test_validation_errors_translates_pydantic(self):
        class Payload(pydantic.BaseModel):
            price: float

        with pytest.raises(ValidationError) as exc:
            with validation_errors():
                Payload(price="cheap")
        assert list(exc.value.messages) == ["price"]


class _Quote:
    pass


class TestPersistenceErrors:
    def test_missing_object_becomes_not_found(self):
        with pytest.raises(NotFoundError) as exc:
            with persistence_errors(_Quote, "q-1"):
                raise ObjectNotFoundError("no such record")
        assert exc.value.messages == {"id": ["_Quote q-1 not found"]}

    def test_stale_write_becomes_conflict(self):
        with pytest.raises(ConflictError):
            with persistence_errors(_Quote, "q-1"):
                raise ExpectedVersionError("expected version 0, found 1")

    def test_failed_commit_becomes_dependency_error(self):
        with pytest.raises(DependencyError) as exc:
            with persistence_errors(_Quote, "q-1"):
                raise TransactionError("commit failed")
        assert "store" in exc.value.messages

    def test_marketplace_errors_pass_through(self):
        original = DependencyError({"store": ["down"]})
        with pytest.raises(DependencyError) as exc:
            with persistence_errors(_Quote):
                raise original
        assert exc.value is original

    def test_validation_errors_pass_through(self):
        with pytest.raises(ValidationError):
            with persistence_errors(_Quote):
                raise ValidationError({"price": ["Price must be greater than 0"]})
