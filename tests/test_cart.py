"""
Tests for the shopping cart store
"""

from decimal import Decimal

import pytest

from musicstore.core.exceptions import CartItemNotFound, ProductNotFound
from musicstore.models import CartItem, Product
from sqlmodel import select


class TestAddItem:
    def test_first_add_creates_line(self, cart, make_product):
        product_id = make_product()
        item, _ = cart.add_item("cart-1", product_id)

        assert item.id is not None
        assert item.quantity == 1
        assert item.cart_id == "cart-1"
        assert item.created_at is not None

    def test_returns_catalog_product(self, cart, make_product):
        product_id = make_product("Worlds", "8.99")
        _, product = cart.add_item("cart-1", product_id)

        assert product.id == product_id
        assert product.name == "Worlds"

    def test_new_lines_carry_aware_timestamps(self):
        item = CartItem(cart_id="cart-1", product_id=1)
        assert item.created_at.tzinfo is not None

    def test_repeated_adds_increment_quantity(self, cart, make_product):
        product_id = make_product()
        for _ in range(3):
            cart.add_item("cart-1", product_id)

        items = cart.list_items("cart-1")
        assert len(items) == 1
        assert items[0][0].quantity == 3

    def test_item_count_matches_number_of_adds(self, cart, make_product):
        a = make_product("A")
        b = make_product("B")
        for product_id in [a, b, a, a, b]:
            cart.add_item("cart-1", product_id)

        assert cart.item_count("cart-1") == 5
        assert len(cart.list_items("cart-1")) == 2

    def test_unknown_product_rejected(self, cart):
        with pytest.raises(ProductNotFound):
            cart.add_item("cart-1", 999)
        assert cart.item_count("cart-1") == 0

    def test_carts_are_isolated(self, cart, make_product):
        product_id = make_product()
        cart.add_item("cart-1", product_id)
        cart.add_item("cart-2", product_id)
        cart.add_item("cart-2", product_id)

        assert cart.item_count("cart-1") == 1
        assert cart.item_count("cart-2") == 2


class TestRemoveOneUnit:
    def test_decrements_quantity(self, cart, make_product):
        product_id = make_product()
        cart.add_item("cart-1", product_id)
        item, _ = cart.add_item("cart-1", product_id)

        assert cart.remove_one_unit("cart-1", item.id) == 1
        assert cart.item_count("cart-1") == 1

    def test_last_unit_deletes_line(self, cart, make_product):
        product_id = make_product()
        item, _ = cart.add_item("cart-1", product_id)

        assert cart.remove_one_unit("cart-1", item.id) == 0
        assert cart.list_items("cart-1") == []

    def test_unknown_item_raises_and_leaves_store_unchanged(self, cart, make_product):
        product_id = make_product()
        cart.add_item("cart-1", product_id)
        cart.add_item("cart-1", product_id)

        with pytest.raises(CartItemNotFound):
            cart.remove_one_unit("cart-1", 12345)

        assert cart.item_count("cart-1") == 2

    def test_other_carts_item_rejected(self, cart, make_product):
        product_id = make_product()
        item, _ = cart.add_item("cart-1", product_id)

        with pytest.raises(CartItemNotFound):
            cart.remove_one_unit("cart-2", item.id)

        assert cart.item_count("cart-1") == 1


class TestEmptyCart:
    def test_removes_all_lines(self, cart, make_product):
        cart.add_item("cart-1", make_product("A"))
        cart.add_item("cart-1", make_product("B"))
        cart.add_item("cart-2", make_product("C"))

        cart.empty_cart("cart-1")

        assert cart.list_items("cart-1") == []
        assert cart.item_count("cart-2") == 1

    def test_empty_cart_is_idempotent(self, cart):
        cart.empty_cart("nobody")
        cart.empty_cart("nobody")
        assert cart.item_count("nobody") == 0


class TestTotals:
    def test_empty_cart_totals(self, cart):
        assert cart.item_count("nobody") == 0
        assert cart.total("nobody") == Decimal("0")

    def test_total_uses_live_prices(self, cart, session, make_product):
        a = make_product("A", "10.00")
        b = make_product("B", "5.00")
        cart.add_item("cart-1", a)
        cart.add_item("cart-1", a)
        cart.add_item("cart-1", b)

        assert cart.total("cart-1") == Decimal("25.00")

        product = session.get(Product, a)
        product.price = Decimal("12.50")
        session.add(product)
        session.commit()

        assert cart.total("cart-1") == Decimal("30.00")

    def test_list_items_joins_product(self, cart, make_product):
        product_id = make_product("Worlds", "8.99")
        cart.add_item("cart-1", product_id)

        [(item, product)] = cart.list_items("cart-1")
        assert isinstance(item, CartItem)
        assert product.name == "Worlds"
        assert product.price == Decimal("8.99")


class TestMigrate:
    def test_moves_lines_to_new_cart(self, cart, make_product):
        product_id = make_product()
        cart.add_item("anon", product_id)

        cart.migrate("anon", "alice")

        assert cart.item_count("anon") == 0
        assert cart.item_count("alice") == 1

    def test_merges_shared_products(self, cart, make_product):
        a = make_product("A")
        b = make_product("B")
        cart.add_item("anon", a)
        cart.add_item("anon", a)
        cart.add_item("anon", b)
        cart.add_item("alice", a)

        cart.migrate("anon", "alice")

        quantities = {item.product_id: item.quantity for item, _ in cart.list_items("alice")}
        assert quantities == {a: 3, b: 1}
        assert cart.list_items("anon") == []


class TestMissingProduct:
    def _cart_with_deleted_product(self, cart, session, make_product):
        a = make_product("A", "10.00")
        b = make_product("B", "5.00")
        cart.add_item("cart-1", a)
        cart.add_item("cart-1", a)
        cart.add_item("cart-1", b)
        session.delete(session.get(Product, b))
        session.commit()
        return a, b

    def test_total_ignores_line_without_product(self, cart, session, make_product):
        self._cart_with_deleted_product(cart, session, make_product)
        assert cart.total("cart-1") == Decimal("20.00")

    def test_list_items_raises_by_default(self, cart, session, make_product):
        self._cart_with_deleted_product(cart, session, make_product)
        with pytest.raises(ProductNotFound):
            cart.list_items("cart-1")

    def test_list_items_can_skip_missing(self, cart, session, make_product):
        a, _ = self._cart_with_deleted_product(cart, session, make_product)
        items = cart.list_items("cart-1", skip_missing=True)
        assert [item.product_id for item, _ in items] == [a]

    def test_line_can_still_be_removed(self, cart, session, make_product):
        _, b = self._cart_with_deleted_product(cart, session, make_product)
        stuck = session.exec(select(CartItem).where(CartItem.product_id == b)).one()

        assert cart.remove_one_unit("cart-1", stuck.id) == 0
        assert cart.item_count("cart-1") == 2
