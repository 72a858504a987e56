from typing import Optional
from datetime import datetime, timezone
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

class CartItem(SQLModel, table=True):
    # One row per product per cart; repeated adds bump quantity
    __table_args__ = (UniqueConstraint("cart_id", "product_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)

    # References
    cart_id: str = Field(index=True)
    product_id: int = Field(foreign_key="product.id")

    # Cart Details
    quantity: int = Field(default=1, ge=1)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
