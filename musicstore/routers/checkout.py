from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from musicstore.db.session import get_session
from musicstore.models.order import Order
from musicstore.routers.cart import get_cart_id
from musicstore.services.checkout import CheckoutService
from pydantic import BaseModel

router = APIRouter()

class OrderCreate(BaseModel):
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

class CheckoutResponse(BaseModel):
    order_id: int
    total: Decimal

class OrderLineResponse(BaseModel):
    product_id: int
    quantity: int
    unit_price: Decimal

class OrderResponse(OrderCreate):
    order_id: int
    order_date: datetime
    total: Decimal
    lines: List[OrderLineResponse]

def get_checkout_service(session: Session = Depends(get_session)) -> CheckoutService:
    return CheckoutService(session)

@router.post("/", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
def checkout(
    order_in: OrderCreate,
    cart_id: str = Depends(get_cart_id),
    service: CheckoutService = Depends(get_checkout_service)
):
    """Place an order for everything in the caller's cart"""
    order_id = service.checkout(cart_id, Order(**order_in.model_dump()))
    order = service.get_order(order_id)
    return CheckoutResponse(order_id=order_id, total=order.total)

@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, service: CheckoutService = Depends(get_checkout_service)):
    order = service.get_order(order_id)
    return OrderResponse(
        **order.model_dump(exclude={"id", "total", "order_date"}),
        order_id=order.id,
        order_date=order.order_date,
        total=order.total,
        lines=[
            OrderLineResponse(product_id=line.product_id, quantity=line.quantity, unit_price=line.unit_price)
            for line in order.lines
        ]
    )
