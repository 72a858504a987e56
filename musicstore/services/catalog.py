from typing import Optional
from sqlmodel import Session
from musicstore.core.exceptions import ProductNotFound
from musicstore.models.product import Product

class CatalogService:
    """Read-only view of the album catalog."""

    def __init__(self, session: Session):
        self.session = session

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.session.get(Product, product_id)

    def require_product(self, product_id: int) -> Product:
        product = self.get_product(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product
