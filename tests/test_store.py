"""Tests for the session cart store."""

import pytest

from directpromo.errors import CartNotFoundError
from directpromo.store import CartStore


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


class TestCartStore:
    def test_create_and_get(self):
        store = CartStore()
        cart_id = store.create()
        assert len(store.get(cart_id)) == 0
        assert store.get(cart_id) is store.get(cart_id)

    def test_unknown_cart(self):
        with pytest.raises(CartNotFoundError) as exc:
            CartStore().get("missing")
        assert exc.value.cart_id == "missing"

    def test_idle_carts_are_evicted(self, clock):
        store = CartStore(idle_seconds=60, clock=clock)
        stale = store.create()
        clock.now = 30
        fresh = store.create()

        clock.now = 61
        with pytest.raises(CartNotFoundError):
            store.get(stale)
        assert store.get(fresh) is not None
        assert len(store) == 1

    def test_access_keeps_cart_alive(self, clock):
        store = CartStore(idle_seconds=60, clock=clock)
        cart_id = store.create()
        for clock.now in (50, 100, 150):
            store.get(cart_id)
        assert len(store) == 1

    def test_least_recently_used_cart_makes_room(self, clock):
        store = CartStore(max_carts=2, clock=clock)
        first = store.create()
        second = store.create()
        store.get(first)

        third = store.create()

        assert len(store) == 2
        with pytest.raises(CartNotFoundError):
            store.get(second)
        store.get(first)
        store.get(third)

    def test_discard(self):
        store = CartStore()
        cart_id = store.create()
        store.discard(cart_id)
        store.discard(cart_id)
        with pytest.raises(CartNotFoundError):
            store.get(cart_id)
