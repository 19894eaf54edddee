"""Tests for the Quote state machine: exhaustive transition table and terminal finality."""

import pytest
from rawsy.catalogue.product.product import Product
from rawsy.negotiation.quote.quote import (
    TERMINAL_STATUSES,
    Party,
    Quote,
    QuoteAction,
    QuoteStatus,
    allowed_targets,
    resolve_target,
)
from rawsy.shared.exceptions import InvalidTransition, ValidationError

BUYER_ID = "buyer-001"
SUPPLIER_ID = "supplier-001"

# status -> party -> allowed target statuses
EXPECTED_TABLE = {
    QuoteStatus.PENDING: {
        Party.SUPPLIER: {QuoteStatus.SUPPLIER_COUNTER, QuoteStatus.REJECTED},
        Party.BUYER: {QuoteStatus.BUYER_CANCEL},
    },
    QuoteStatus.SUPPLIER_COUNTER: {
        Party.BUYER: {QuoteStatus.BUYER_ACCEPT, QuoteStatus.REJECTED},
        Party.SUPPLIER: {QuoteStatus.SUPPLIER_COUNTER, QuoteStatus.REJECTED},
    },
    QuoteStatus.SUPPLIER_ACCEPT: {},
    QuoteStatus.BUYER_ACCEPT: {
        Party.SUPPLIER: {QuoteStatus.CONVERTED},
    },
    QuoteStatus.REJECTED: {},
    QuoteStatus.BUYER_CANCEL: {},
    QuoteStatus.CONVERTED: {},
}

ACTION_FOR_TARGET = {
    QuoteStatus.SUPPLIER_COUNTER: QuoteAction.COUNTER,
    QuoteStatus.BUYER_ACCEPT: QuoteAction.ACCEPT,
    QuoteStatus.REJECTED: QuoteAction.REJECT,
    QuoteStatus.BUYER_CANCEL: QuoteAction.CANCEL,
    QuoteStatus.CONVERTED: QuoteAction.CONVERT,
}


def _make_product(**overrides):
    defaults = {
        "supplier_id": SUPPLIER_ID,
        "name": "Cassava Flour",
        "category": "flour",
        "price": 50.0,
        "unit": "bag",
        "stock": 200,
        "negotiable": True,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


def _make_quote(quantity=10):
    quote = Quote.request(_make_product(), buyer_id=BUYER_ID, quantity=quantity)
    quote._events.clear()
    return quote


def _quote_in(status: QuoteStatus) -> Quote:
    """A quote placed directly in ``status`` with consistent counter fields."""
    quote = _make_quote()
    if status in (QuoteStatus.SUPPLIER_COUNTER, QuoteStatus.BUYER_ACCEPT, QuoteStatus.CONVERTED):
        quote.transition(QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER}, counter_price=45.0)
    quote.status = status.value
    quote._events.clear()
    return quote


def _cases():
    for status in QuoteStatus:
        for party in Party:
            for target in ACTION_FOR_TARGET:
                allowed = target in EXPECTED_TABLE[status].get(party, set())
                yield pytest.param(status, party, target, allowed, id=f"{status.value}-{party.value}-{target.value}")


# ---------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------
class TestTransitionTable:
    @pytest.mark.parametrize("status", list(QuoteStatus), ids=lambda s: s.value)
    def test_allowed_targets_match_table(self, status):
        for party in Party:
            assert set(allowed_targets(status, party)) == EXPECTED_TABLE[status].get(party, set())

    @pytest.mark.parametrize("status, party, target, allowed", list(_cases()))
    def test_every_status_party_target_combination(self, status, party, target, allowed):
        quote = _quote_in(status)
        actor_id = SUPPLIER_ID if party == Party.SUPPLIER else BUYER_ID
        action = ACTION_FOR_TARGET[target]

        if allowed:
            acted = quote.transition(action, actor_id, {party}, counter_price=40.0)
            assert acted == party
            assert quote.status == target.value
        else:
            with pytest.raises(InvalidTransition) as exc:
                quote.transition(action, actor_id, {party}, counter_price=40.0)
            assert exc.value.current_status == status.value
            assert quote.status == status.value

    def test_supplier_accept_is_unreachable(self):
        for status in QuoteStatus:
            for party in Party:
                assert QuoteStatus.SUPPLIER_ACCEPT not in allowed_targets(status, party)


# ---------------------------------------------------------------
# Terminal finality
# ---------------------------------------------------------------
class TestTerminalFinality:
    @pytest.mark.parametrize("status", sorted(TERMINAL_STATUSES, key=lambda s: s.value), ids=lambda s: s.value)
    def test_terminal_status_rejects_every_action(self, status):
        quote = _quote_in(status)
        assert quote.is_terminal

        for action in QuoteAction:
            with pytest.raises(InvalidTransition, match="accepts no further transitions"):
                quote.transition(action, SUPPLIER_ID, {Party.BUYER, Party.SUPPLIER}, counter_price=40.0)
        assert quote.status == status.value

    def test_non_terminal_statuses(self):
        assert not _quote_in(QuoteStatus.PENDING).is_terminal
        assert not _quote_in(QuoteStatus.SUPPLIER_COUNTER).is_terminal
        assert not _quote_in(QuoteStatus.BUYER_ACCEPT).is_terminal


# ---------------------------------------------------------------
# Transition details
# ---------------------------------------------------------------
class TestCounter:
    def test_counter_sets_price_message_and_timestamp(self):
        quote = _make_quote()
        quote.transition(
            QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER}, counter_price=45.0, supplier_message="Best price"
        )
        assert quote.status == QuoteStatus.SUPPLIER_COUNTER.value
        assert quote.counter_price == 45.0
        assert quote.supplier_message == "Best price"
        assert quote.countered_at is not None

    def test_re_counter_replaces_price(self):
        quote = _make_quote()
        quote.transition(QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER}, counter_price=45.0)
        quote.transition(QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER}, counter_price=43.0)
        assert quote.counter_price == 43.0
        assert len(quote.history) == 2

    def test_counter_without_price_fails(self):
        quote = _make_quote()
        with pytest.raises(ValidationError) as exc:
            quote.transition(QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER})
        assert "counter_price" in exc.value.messages
        assert quote.status == QuoteStatus.PENDING.value
        assert quote.counter_price is None

    @pytest.mark.parametrize("price", [0, -5.0, True])
    def test_counter_with_invalid_price_fails(self, price):
        quote = _make_quote()
        with pytest.raises(ValidationError):
            quote.transition(QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER}, counter_price=price)

    def test_counter_message_too_long_fails(self):
        quote = _make_quote()
        with pytest.raises(ValidationError):
            quote.transition(
                QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER}, counter_price=45.0, supplier_message="x" * 2001
            )

    def test_counter_price_present_iff_countered(self):
        quote = _make_quote()
        assert quote.counter_price is None and quote.countered_at is None

        quote.transition(QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER}, counter_price=45.0)
        quote.transition(QuoteAction.ACCEPT, BUYER_ID, {Party.BUYER})
        assert quote.counter_price is not None and quote.countered_at is not None

    def test_reject_from_pending_keeps_counter_price_empty(self):
        quote = _make_quote()
        quote.transition(QuoteAction.REJECT, SUPPLIER_ID, {Party.SUPPLIER})
        assert quote.counter_price is None
        assert quote.rejected_at is not None


class TestTimestampsAndHistory:
    def test_each_transition_stamps_its_timestamp(self):
        quote = _make_quote()
        quote.transition(QuoteAction.COUNTER, SUPPLIER_ID, {Party.SUPPLIER}, counter_price=45.0)
        quote.transition(QuoteAction.ACCEPT, BUYER_ID, {Party.BUYER})
        quote.transition(QuoteAction.CONVERT, SUPPLIER_ID, {Party.SUPPLIER})

        assert quote.accepted_at is not None
        assert quote.converted_at is not None
        assert quote.updated_at >= quote.created_at

    def test_history_records_each_step(self):
        quote = _make_quote()
        quote.transition(QuoteAction.CANCEL, BUYER_ID, {Party.BUYER})

        assert len(quote.history) == 1
        entry = quote.history[0]
        assert entry.from_status == "pending"
        assert entry.to_status == "buyer_cancel"
        assert entry.actor_id == BUYER_ID

    def test_failed_transition_leaves_no_history(self):
        quote = _make_quote()
        with pytest.raises(InvalidTransition):
            quote.transition(QuoteAction.ACCEPT, BUYER_ID, {Party.BUYER})
        assert quote.history == []


# ---------------------------------------------------------------
# Action resolution and parties
# ---------------------------------------------------------------
class TestResolveTarget:
    @pytest.mark.parametrize(
        "action, expected",
        [
            ("counter", QuoteStatus.SUPPLIER_COUNTER),
            ("ACCEPT", QuoteStatus.BUYER_ACCEPT),
            ("reject", QuoteStatus.REJECTED),
            ("cancel", QuoteStatus.BUYER_CANCEL),
            ("convert", QuoteStatus.CONVERTED),
            ("buyer_accept", QuoteStatus.BUYER_ACCEPT),
            (QuoteAction.COUNTER, QuoteStatus.SUPPLIER_COUNTER),
            (QuoteStatus.REJECTED, QuoteStatus.REJECTED),
        ],
    )
    def test_resolves(self, action, expected):
        assert resolve_target(action) == expected

    def test_unknown_action_is_validation_error(self):
        with pytest.raises(ValidationError) as exc:
            resolve_target("haggle")
        assert "action" in exc.value.messages


class TestPartySelection:
    def test_admin_acting_for_both_parties_counters_as_supplier(self):
        quote = _make_quote()
        acted = quote.transition(
            QuoteAction.COUNTER, "admin-1", {Party.BUYER, Party.SUPPLIER}, counter_price=45.0
        )
        assert acted == Party.SUPPLIER

    def test_admin_acting_for_both_parties_can_accept_as_buyer(self):
        quote = _quote_in(QuoteStatus.SUPPLIER_COUNTER)
        acted = quote.transition(QuoteAction.ACCEPT, "admin-1", {Party.BUYER, Party.SUPPLIER})
        assert acted == Party.BUYER

    def test_buyer_cannot_counter(self):
        quote = _make_quote()
        with pytest.raises(InvalidTransition):
            quote.transition(QuoteAction.COUNTER, BUYER_ID, {Party.BUYER}, counter_price=45.0)

    def test_supplier_cannot_cancel(self):
        quote = _make_quote()
        with pytest.raises(InvalidTransition):
            quote.transition(QuoteAction.CANCEL, SUPPLIER_ID, {Party.SUPPLIER})

    def test_repeating_current_status_is_not_idempotent(self):
        quote = _quote_in(QuoteStatus.BUYER_ACCEPT)
        with pytest.raises(InvalidTransition):
            quote.transition(QuoteAction.ACCEPT, BUYER_ID, {Party.BUYER})
