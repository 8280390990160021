"""In-memory cart for collecting a quote request.

Line items are keyed by ``(product id, selected color)``. Adding an item that
already exists merges its size breakdown into the existing entry; driving every
size of an entry to zero removes the entry.
"""
from __future__ import annotations
import math
from typing import Iterable

from directpromo.schemas import CartLineItem, Product, SizeQuantity


def _total(breakdown: Iterable[SizeQuantity]) -> int:
    return sum(sq.quantity for sq in breakdown)


def line_item_from_product(product: Product, color: str, breakdown: Iterable[SizeQuantity]) -> CartLineItem:
    """Snapshot a catalog product into a cart line item candidate."""
    sizes = [SizeQuantity(size=sq.size, quantity=sq.quantity) for sq in breakdown]
    return CartLineItem(
        **product.model_dump(),
        selected_color=color,
        size_breakdown=sizes,
        quantity=_total(sizes),
    )


class Cart:
    """One session's cart. Every mutator swaps in a new entry list."""

    def __init__(self, items: Iterable[CartLineItem] = ()):
        self._items: list[CartLineItem] = [item.model_copy(deep=True) for item in items]

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(item.model_copy(deep=True) for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _index_of(self, product_id: str, color: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == product_id and item.selected_color == color:
                return index
        return -1

    def add_to_cart(self, candidate: CartLineItem) -> None:
        index = self._index_of(candidate.id, candidate.selected_color)
        if index < 0:
            self._items = [*self._items, candidate.model_copy(deep=True)]
            return

        existing = self._items[index]
        breakdown = [sq.model_copy() for sq in existing.size_breakdown]
        for incoming in candidate.size_breakdown:
            for sq in breakdown:
                if sq.size == incoming.size:
                    sq.quantity += incoming.quantity
                    break
            else:
                breakdown.append(incoming.model_copy())

        # Total always comes from the merged breakdown, never the candidate
        merged = existing.model_copy(update={"size_breakdown": breakdown, "quantity": _total(breakdown)})
        items = list(self._items)
        items[index] = merged
        self._items = items

    def remove_from_cart(self, product_id: str, color: str) -> None:
        self._items = [
            item for item in self._items
            if not (item.id == product_id and item.selected_color == color)
        ]

    def update_quantity(self, product_id: str, color: str, size: str, new_quantity: int) -> None:
        if isinstance(new_quantity, bool) or not isinstance(new_quantity, (int, float)):
            return
        if isinstance(new_quantity, float) and not math.isfinite(new_quantity):
            return
        quantity = max(0, int(new_quantity))

        items: list[CartLineItem] = []
        for item in self._items:
            if item.id != product_id or item.selected_color != color:
                items.append(item)
                continue
            breakdown = [
                SizeQuantity(size=sq.size, quantity=quantity) if sq.size == size else sq.model_copy()
                for sq in item.size_breakdown
            ]
            total = _total(breakdown)
            if total == 0:
                continue
            items.append(item.model_copy(update={"size_breakdown": breakdown, "quantity": total}))
        self._items = items

    def clear_cart(self) -> None:
        self._items = []

    def get_total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_total_price(self) -> float:
        # Snapshot price; a "call for pricing" entry contributes nothing
        return sum((item.price or 0) * item.quantity for item in self._items)
