# shopcart/exceptions.py
from __future__ import annotations


class CartError(Exception):
    """Base class for everything the cart raises."""


class InvalidArgument(CartError, ValueError):
    pass


class InvalidHash(CartError, KeyError):
    def __init__(self, item_hash: str):
        self.item_hash = item_hash
        super().__init__(f"The cart does not contain hash {item_hash}.")

    def __str__(self) -> str:
        return self.args[0]


class InvalidModel(CartError, LookupError):
    pass
