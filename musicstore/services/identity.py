"""Per-browser cart identity.

A cart is keyed by an opaque token the client presents on every request. The
token is issued on first contact and handed back through the response; the
transport (cookie, header) is up to the caller of :meth:`CartIdentity.attach`.
"""

import uuid
from typing import Mapping, Optional

from fastapi import Response

from musicstore.core.logging import get_logger

logger = get_logger(__name__)


class CartIdentity:
    def __init__(self, cookie_name: str, max_age: Optional[int] = None):
        self.cookie_name = cookie_name
        self.max_age = max_age

    def resolve(self, cookies: Mapping[str, str]) -> Optional[str]:
        """Return the presented token, or None when it is missing or blank."""
        token = cookies.get(self.cookie_name)
        if token is None or not token.strip():
            return None
        return token

    def attach(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.max_age,
            path="/",
            httponly=True,
            samesite="lax",
        )

    @staticmethod
    def new_token() -> str:
        return str(uuid.uuid4())

    def resolve_cart_id(self, cookies: Mapping[str, str], response: Response) -> str:
        cart_id = self.resolve(cookies)
        if cart_id is None:
            cart_id = self.new_token()
            self.attach(response, cart_id)
            logger.debug("Issued new cart id", cart_id=cart_id)
        return cart_id
