from decimal import Decimal
from typing import List, Optional
from datetime import datetime, timezone
from sqlmodel import Field, Relationship, SQLModel

class OrderLine(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: Optional[int] = Field(default=None, foreign_key="order.id")
    product_id: int = Field(foreign_key="product.id")
    quantity: int
    # Price at checkout time, never a live reference to the catalog
    unit_price: Decimal = Field(max_digits=10, decimal_places=2)

class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # Customer Details
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

    # Order Details
    total: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    order_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    lines: List["OrderLine"] = Relationship(
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "OrderLine.id"}
    )
