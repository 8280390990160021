from __future__ import annotations
import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from directpromo.cart import Cart
from directpromo.errors import CartNotFoundError
from directpromo.settings import get_settings


class CartStore:
    """Session carts held in process memory, one Cart per id.

    Carts idle for longer than ``idle_seconds`` are dropped, and once
    ``max_carts`` is reached the least recently used cart makes room for a new one.
    """

    def __init__(self, idle_seconds: float = 86400, max_carts: int = 10000, clock: Callable[[], float] = time.monotonic):
        self.idle_seconds = idle_seconds
        self.max_carts = max_carts
        self._clock = clock
        # cart id -> (cart, last access), oldest access first
        self._carts: OrderedDict[str, tuple[Cart, float]] = OrderedDict()
        self._lock = threading.Lock()

    def _evict_idle(self, now: float) -> None:
        while self._carts:
            cart_id, (_, touched) = next(iter(self._carts.items()))
            if now - touched <= self.idle_seconds:
                break
            del self._carts[cart_id]

    def create(self) -> str:
        cart_id = uuid.uuid4().hex
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            while len(self._carts) >= self.max_carts:
                self._carts.popitem(last=False)
            self._carts[cart_id] = (Cart(), now)
        return cart_id

    def get(self, cart_id: str) -> Cart:
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            entry = self._carts.get(cart_id)
            if entry is None:
                raise CartNotFoundError(cart_id)
            cart = entry[0]
            self._carts[cart_id] = (cart, now)
            self._carts.move_to_end(cart_id)
        return cart

    def discard(self, cart_id: str) -> None:
        with self._lock:
            self._carts.pop(cart_id, None)

    def __len__(self) -> int:
        return len(self._carts)


_store: Optional[CartStore] = None


def get_store() -> CartStore:
    global _store
    if _store is None:
        settings = get_settings()
        _store = CartStore(idle_seconds=settings.CART_IDLE_SECONDS, max_carts=settings.MAX_CARTS)
    return _store
