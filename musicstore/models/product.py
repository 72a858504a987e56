from decimal import Decimal
from typing import Optional
from sqlmodel import Field, SQLModel

class Product(SQLModel, table=True):
    """Catalog entry. Read-only as far as carts and checkout are concerned."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    price: Decimal = Field(max_digits=10, decimal_places=2)
