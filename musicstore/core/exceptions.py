"""Domain errors raised by the cart and checkout services.

Database failures are not wrapped: ``sqlalchemy.exc.SQLAlchemyError`` reaches
the caller unchanged after the transaction has been rolled back.
"""


class MusicStoreError(Exception):
    """Base class for errors the HTTP layer knows how to translate."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class CartItemNotFound(MusicStoreError):
    status_code = 404

    def __init__(self, cart_id: str, cart_item_id: int):
        super().__init__(f"Cart item {cart_item_id} not found")
        self.cart_id = cart_id
        self.cart_item_id = cart_item_id


class ProductNotFound(MusicStoreError):
    status_code = 404

    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class OrderNotFound(MusicStoreError):
    status_code = 404

    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id
