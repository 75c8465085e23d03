# shopcart/helpers.py
from __future__ import annotations

from typing import Optional

from .cart import Cart


def cart(request, instance: Optional[str] = None) -> Cart:
    """
    The request's cart, switched to ``instance``.

    Uses the one CartMiddleware attached when present so every caller in a
    request shares it; otherwise builds one over ``request.session``.
    """
    current = getattr(request, "cart", None)
    if current is None:
        current = Cart.from_request(request)
    return current.instance(instance)
