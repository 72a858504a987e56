from decimal import Decimal

from sqlmodel import Session

from musicstore.core.exceptions import OrderNotFound, ProductNotFound
from musicstore.core.logging import get_logger
from musicstore.db.session import transaction
from musicstore.models.order import Order, OrderLine
from musicstore.services.cart import ShoppingCart

logger = get_logger(__name__)


class CheckoutService:
    def __init__(self, session: Session, cart: ShoppingCart = None):
        self.session = session
        self.cart = cart or ShoppingCart(session)

    def checkout(self, cart_id: str, order: Order) -> int:
        """Turn the cart into ``order`` and return the new order id.

        Prices are copied from the catalog onto the order lines. The order,
        its lines and the emptied cart are committed together; on any error
        nothing is written and the cart keeps its lines.
        """
        try:
            with transaction(self.session):
                order_total = Decimal("0.00")
                lines = []
                for item, product in self.cart.list_items(cart_id):
                    lines.append(OrderLine(
                        product_id=item.product_id,
                        quantity=item.quantity,
                        unit_price=product.price
                    ))
                    order_total += item.quantity * product.price

                order.total = order_total
                order.lines = lines
                self.session.add(order)
                self.cart.delete_lines(cart_id)
        except ProductNotFound as e:
            logger.warning("Checkout aborted, product missing", cart_id=cart_id, product_id=e.product_id)
            raise

        self.session.refresh(order)
        logger.info("Checkout complete", cart_id=cart_id, order_id=order.id, total=str(order.total))
        return order.id

    def get_order(self, order_id: int) -> Order:
        order = self.session.get(Order, order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order
