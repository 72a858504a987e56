from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlmodel import Session, select, delete, func

from musicstore.core.exceptions import CartItemNotFound
from musicstore.core.logging import get_logger
from musicstore.db.session import transaction
from musicstore.models.cart import CartItem
from musicstore.models.product import Product
from musicstore.services.catalog import CatalogService

logger = get_logger(__name__)


class ShoppingCart:
    """Line items of the carts, each scoped by the caller's cart id."""

    def __init__(self, session: Session, catalog: Optional[CatalogService] = None):
        self.session = session
        self.catalog = catalog or CatalogService(session)

    def _find_by_product(self, cart_id: str, product_id: int) -> Optional[CartItem]:
        return self.session.exec(
            select(CartItem).where(
                CartItem.cart_id == cart_id,
                CartItem.product_id == product_id
            )
        ).first()

    def _lines(self, cart_id: str) -> List[CartItem]:
        return self.session.exec(
            select(CartItem).where(CartItem.cart_id == cart_id).order_by(CartItem.id)
        ).all()

    def delete_lines(self, cart_id: str) -> None:
        """Delete every line of the cart without committing."""
        self.session.exec(delete(CartItem).where(CartItem.cart_id == cart_id))

    def add_item(self, cart_id: str, product_id: int) -> Tuple[CartItem, Product]:
        """Add one unit of a product, creating the line on first add.

        Returns the line together with the catalog product it refers to.
        """
        product = self.catalog.require_product(product_id)

        with transaction(self.session):
            item = self._find_by_product(cart_id, product_id)
            if item is None:
                item = CartItem(
                    cart_id=cart_id,
                    product_id=product_id,
                    quantity=1,
                    created_at=datetime.now(timezone.utc)
                )
            else:
                item.quantity += 1
            self.session.add(item)

        self.session.refresh(item)
        logger.info("Item added to cart", cart_id=cart_id, product_id=product_id, quantity=item.quantity)
        return item, product

    def remove_one_unit(self, cart_id: str, cart_item_id: int) -> int:
        """Take one unit off a line and return what is left of it.

        The line is deleted when its last unit goes, in which case 0 is
        returned. The line must belong to ``cart_id``.
        """
        with transaction(self.session):
            item = self.session.exec(
                select(CartItem).where(
                    CartItem.id == cart_item_id,
                    CartItem.cart_id == cart_id
                )
            ).first()
            if item is None:
                logger.warning("Cart item not found", cart_id=cart_id, cart_item_id=cart_item_id)
                raise CartItemNotFound(cart_id, cart_item_id)

            if item.quantity > 1:
                item.quantity -= 1
                remaining = item.quantity
                self.session.add(item)
            else:
                self.session.delete(item)
                remaining = 0

        logger.info("Item removed from cart", cart_id=cart_id, cart_item_id=cart_item_id, remaining=remaining)
        return remaining

    def empty_cart(self, cart_id: str) -> None:
        with transaction(self.session):
            self.delete_lines(cart_id)
        logger.info("Cart emptied", cart_id=cart_id)

    def list_items(self, cart_id: str, skip_missing: bool = False) -> List[Tuple[CartItem, Product]]:
        """Lines of the cart in insertion order, each with its live product.

        A line whose product has left the catalog raises ``ProductNotFound``,
        or is left out when ``skip_missing`` is set.
        """
        result = []
        for item in self._lines(cart_id):
            if skip_missing:
                product = self.catalog.get_product(item.product_id)
                if product is None:
                    logger.warning("Cart line without product", cart_id=cart_id, product_id=item.product_id)
                    continue
            else:
                product = self.catalog.require_product(item.product_id)
            result.append((item, product))
        return result

    def item_count(self, cart_id: str) -> int:
        count = self.session.exec(
            select(func.coalesce(func.sum(CartItem.quantity), 0)).where(CartItem.cart_id == cart_id)
        ).one()
        return int(count)

    def total(self, cart_id: str) -> Decimal:
        """Sum of quantity x current catalog price over the cart's lines.

        Lines whose product is no longer in the catalog do not count.
        """
        total = self.session.exec(
            select(func.coalesce(func.sum(CartItem.quantity * Product.price), 0))
            .select_from(CartItem)
            .join(Product, Product.id == CartItem.product_id)
            .where(CartItem.cart_id == cart_id)
        ).one()
        return Decimal(str(total)).quantize(Decimal("0.01"))

    def migrate(self, from_cart_id: str, to_cart_id: str) -> None:
        """Move every line of one cart into another, merging shared products."""
        if from_cart_id == to_cart_id:
            return

        with transaction(self.session):
            for item in self._lines(from_cart_id):
                existing = self._find_by_product(to_cart_id, item.product_id)
                if existing is None:
                    item.cart_id = to_cart_id
                    self.session.add(item)
                else:
                    existing.quantity += item.quantity
                    self.session.add(existing)
                    self.session.delete(item)

        logger.info("Cart migrated", from_cart_id=from_cart_id, to_cart_id=to_cart_id)
