from decimal import Decimal
from typing import List
from fastapi import APIRouter, Depends, Request, Response
from sqlmodel import Session
from musicstore.core.config import settings
from musicstore.db.session import get_session
from musicstore.models.cart import CartItem
from musicstore.models.product import Product
from musicstore.services.cart import ShoppingCart
from musicstore.services.identity import CartIdentity
from pydantic import BaseModel

router = APIRouter()

identity = CartIdentity(settings.CART_COOKIE_NAME, settings.CART_COOKIE_MAX_AGE)

class CartItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: str
    quantity: int
    price: Decimal
    total: Decimal

class CartResponse(BaseModel):
    items: List[CartItemResponse]
    item_count: int
    total: Decimal

class CartRemoveResponse(BaseModel):
    message: str
    cart_total: Decimal
    cart_count: int
    item_count: int
    delete_id: int

def get_cart_id(request: Request, response: Response) -> str:
    return identity.resolve_cart_id(request.cookies, response)

def get_shopping_cart(session: Session = Depends(get_session)) -> ShoppingCart:
    return ShoppingCart(session)

def to_response(item: CartItem, product: Product) -> CartItemResponse:
    return CartItemResponse(
        id=item.id,
        product_id=item.product_id,
        product_name=product.name,
        quantity=item.quantity,
        price=product.price,
        total=item.quantity * product.price
    )

@router.get("/", response_model=CartResponse)
def get_cart(cart_id: str = Depends(get_cart_id), cart: ShoppingCart = Depends(get_shopping_cart)):
    """Get the caller's cart with live prices"""
    items = [to_response(item, product) for item, product in cart.list_items(cart_id, skip_missing=True)]
    return CartResponse(
        items=items,
        item_count=sum(i.quantity for i in items),
        total=sum((i.total for i in items), Decimal("0.00"))
    )

@router.get("/count")
def get_cart_count(cart_id: str = Depends(get_cart_id), cart: ShoppingCart = Depends(get_shopping_cart)):
    """Number of units in the cart"""
    return {"item_count": cart.item_count(cart_id)}

@router.post("/add/{product_id}", response_model=CartItemResponse)
def add_to_cart(
    product_id: int,
    cart_id: str = Depends(get_cart_id),
    cart: ShoppingCart = Depends(get_shopping_cart)
):
    """Add one unit of a product to the cart"""
    item, product = cart.add_item(cart_id, product_id)
    return to_response(item, product)

@router.delete("/remove/{cart_item_id}", response_model=CartRemoveResponse)
def remove_from_cart(
    cart_item_id: int,
    cart_id: str = Depends(get_cart_id),
    cart: ShoppingCart = Depends(get_shopping_cart)
):
    """Remove one unit of a cart line"""
    remaining = cart.remove_one_unit(cart_id, cart_item_id)
    return CartRemoveResponse(
        message="Item removed from cart",
        cart_total=cart.total(cart_id),
        cart_count=cart.item_count(cart_id),
        item_count=remaining,
        delete_id=cart_item_id
    )

@router.delete("/clear")
def clear_cart(cart_id: str = Depends(get_cart_id), cart: ShoppingCart = Depends(get_shopping_cart)):
    """Clear entire cart"""
    cart.empty_cart(cart_id)
    return {"message": "Cart cleared"}
