# shopcart/middleware.py
from __future__ import annotations

from django.utils.functional import SimpleLazyObject

from .cart import Cart


class CartMiddleware:
    """Attach ``request.cart``. Must run after SessionMiddleware."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.cart = SimpleLazyObject(lambda: Cart.from_request(request))
        return self.get_response(request)
