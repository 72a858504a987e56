# Import all models to register them with SQLModel
from musicstore.models.product import Product
from musicstore.models.cart import CartItem
from musicstore.models.order import Order, OrderLine

__all__ = [
    "Product",
    "CartItem",
    "Order",
    "OrderLine",
]
