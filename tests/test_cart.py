"""Tests for the in-memory cart."""

import pytest

from directpromo.cart import Cart, line_item_from_product
from directpromo.catalog import get_product
from directpromo.schemas import SizeQuantity

from .conftest import make_item


def sizes_of(item):
    return {sq.size: sq.quantity for sq in item.size_breakdown}


class TestAddToCart:
    def test_new_entry_is_appended_as_given(self):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("S", 2), ("M", 3)]))

        assert len(cart) == 1
        item = cart.items[0]
        assert item.id == "p1"
        assert item.selected_color == "Red"
        assert sizes_of(item) == {"S": 2, "M": 3}
        assert item.quantity == 5

    def test_same_product_and_color_merges_sizes(self):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("S", 1)]))
        cart.add_to_cart(make_item(sizes=[("S", 2)]))

        assert len(cart) == 1
        assert sizes_of(cart.items[0]) == {"S": 3}
        assert cart.items[0].quantity == 3

    def test_merge_appends_new_sizes_in_order(self):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("M", 4)]))
        cart.add_to_cart(make_item(sizes=[("S", 1), ("M", 1)]))

        item = cart.items[0]
        assert [sq.size for sq in item.size_breakdown] == ["M", "S"]
        assert sizes_of(item) == {"M": 5, "S": 1}
        assert item.quantity == 6

    def test_merge_ignores_candidate_quantity_field(self):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("S", 1)]))
        cart.add_to_cart(make_item(sizes=[("S", 1)], quantity=99))

        assert cart.items[0].quantity == 2

    def test_different_color_is_a_separate_entry(self):
        cart = Cart()
        cart.add_to_cart(make_item(color="Red"))
        cart.add_to_cart(make_item(color="Blue"))

        assert [item.selected_color for item in cart.items] == ["Red", "Blue"]

    def test_candidate_is_not_aliased(self):
        cart = Cart()
        candidate = make_item(sizes=[("S", 1)])
        cart.add_to_cart(candidate)
        cart.add_to_cart(make_item(sizes=[("S", 4)]))

        assert candidate.size_breakdown[0].quantity == 1

    def test_items_snapshot_cannot_mutate_cart(self):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("S", 1)]))
        cart.items[0].size_breakdown[0].quantity = 50

        assert cart.items[0].size_breakdown[0].quantity == 1


class TestRemoveFromCart:
    def test_removes_only_matching_color(self):
        cart = Cart()
        cart.add_to_cart(make_item(color="Red"))
        cart.add_to_cart(make_item(color="Blue"))

        cart.remove_from_cart("p1", "Red")

        assert len(cart) == 1
        assert cart.items[0].selected_color == "Blue"

    def test_missing_entry_is_noop(self):
        cart = Cart()
        cart.add_to_cart(make_item())

        cart.remove_from_cart("p1", "Green")
        cart.remove_from_cart("nope", "Red")

        assert len(cart) == 1


class TestUpdateQuantity:
    def test_sets_size_and_recomputes_total(self):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("S", 1), ("M", 1)]))

        cart.update_quantity("p1", "Red", "M", 7)

        assert sizes_of(cart.items[0]) == {"S": 1, "M": 7}
        assert cart.items[0].quantity == 8

    def test_all_sizes_zero_removes_entry(self):
        cart = Cart()
        cart.add_to_cart(make_item(color="Red", sizes=[("M", 1)]))
        cart.add_to_cart(make_item(color="Blue", sizes=[("M", 1)]))

        cart.update_quantity("p1", "Red", "M", 0)

        assert len(cart) == 1
        assert cart.items[0].selected_color == "Blue"
        assert sizes_of(cart.items[0]) == {"M": 1}

    def test_negative_clamps_to_zero(self):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("S", 2), ("M", 3)]))

        cart.update_quantity("p1", "Red", "M", -5)

        assert sizes_of(cart.items[0]) == {"S": 2, "M": 0}
        assert cart.items[0].quantity == 2

    def test_other_sizes_and_colors_untouched(self):
        cart = Cart()
        cart.add_to_cart(make_item(color="Red", sizes=[("S", 2), ("M", 3)]))
        cart.add_to_cart(make_item(color="Blue", sizes=[("S", 4)]))

        cart.update_quantity("p1", "Red", "S", 0)

        red, blue = cart.items
        assert sizes_of(red) == {"S": 0, "M": 3}
        assert sizes_of(blue) == {"S": 4}

    def test_unknown_entry_or_size_is_noop(self):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("S", 2)]))

        cart.update_quantity("p1", "Green", "S", 9)
        cart.update_quantity("p1", "Red", "XL", 9)

        assert sizes_of(cart.items[0]) == {"S": 2}

    @pytest.mark.parametrize("quantity", ["lots", None, float("nan"), float("inf"), float("-inf")])
    def test_non_numeric_quantity_is_ignored(self, quantity):
        cart = Cart()
        cart.add_to_cart(make_item(sizes=[("S", 2)]))

        cart.update_quantity("p1", "Red", "S", quantity)

        assert cart.items[0].quantity == 2


class TestClearAndTotals:
    def test_clear_twice_leaves_cart_empty(self):
        cart = Cart()
        cart.add_to_cart(make_item())

        cart.clear_cart()
        assert len(cart) == 0
        cart.clear_cart()
        assert len(cart) == 0
        assert cart.get_total_items() == 0

    def test_total_items_tracks_every_operation(self):
        cart = Cart()
        cart.add_to_cart(make_item("p1", "Red", [("S", 2), ("M", 3)]))
        cart.add_to_cart(make_item("p2", "Blue", [("L", 4)]))
        cart.add_to_cart(make_item("p1", "Red", [("S", 1)]))
        assert cart.get_total_items() == 10

        cart.update_quantity("p2", "Blue", "L", 1)
        assert cart.get_total_items() == 7

        cart.remove_from_cart("p1", "Red")
        assert cart.get_total_items() == 1
        assert cart.get_total_items() == sum(sq.quantity for item in cart.items for sq in item.size_breakdown)

    def test_total_price_uses_snapshot_price(self):
        product = get_product("premium-tshirt")
        cart = Cart()
        cart.add_to_cart(line_item_from_product(product, "White", [SizeQuantity(size="M", quantity=10)]))

        # A later catalog price does not reach items already in the cart
        repriced = product.model_copy(update={"price": 100.0})
        cart.add_to_cart(line_item_from_product(repriced, "Black", [SizeQuantity(size="M", quantity=1)]))

        assert cart.get_total_price() == 10 * 9.99 + 100.0

    def test_total_price_skips_unpriced_items(self):
        cart = Cart()
        cart.add_to_cart(make_item("p1", price=5.0, sizes=[("S", 2)]))
        cart.add_to_cart(make_item("p2", price=None, sizes=[("S", 3)]))

        assert cart.get_total_price() == 10.0


class TestLineItemFromProduct:
    def test_snapshots_product_fields(self):
        product = get_product("zip-hoodie")
        item = line_item_from_product(
            product, "Maroon", [SizeQuantity(size="S", quantity=10), SizeQuantity(size="L", quantity=10)]
        )

        assert item.id == "zip-hoodie"
        assert item.price == 24.99
        assert item.min_order == 20
        assert item.selected_color == "Maroon"
        assert item.quantity == 20
