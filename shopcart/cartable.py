# shopcart/cartable.py
from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from django.apps import apps

from .exceptions import InvalidModel
from .item import Item, to_number


@runtime_checkable
class Cartable(Protocol):
    def get_cartable_id(self) -> Any: ...

    def get_cartable_title(self) -> str: ...

    def get_cartable_price(self) -> float: ...


def cartable_tag(obj_or_cls: Any) -> str:
    """Type-tag stored as ``associated``: the model label, or a dotted class path."""
    cls = obj_or_cls if isinstance(obj_or_cls, type) else type(obj_or_cls)
    meta = getattr(cls, "_meta", None)
    if meta is not None and getattr(meta, "label", None):
        return meta.label
    return f"{cls.__module__}.{cls.__qualname__}"


class Shopping:
    """
    Mixin giving a domain object (usually a Django model) cart integration.

    Override ``cart_title_field`` / ``cart_price_field`` when the model does
    not use ``title`` / ``price``.
    """

    cart_title_field: Optional[str] = None
    cart_price_field: Optional[str] = None

    def get_cartable_id(self) -> Any:
        pk = getattr(self, "pk", None)
        return pk if pk is not None else getattr(self, "id", None)

    def get_cartable_title(self) -> str:
        field = self.cart_title_field or "title"
        return getattr(self, field, None) or "Unknown"

    def get_cartable_price(self) -> float:
        field = self.cart_price_field or "price"
        return to_number(getattr(self, field, None)) or 0.0

    def add_to_cart(self, cart, instance: Optional[str] = None, qty: int = 1, options: Optional[Mapping[str, Any]] = None) -> Item:
        return cart.instance(instance).add(
            self.get_cartable_id(),
            self.get_cartable_title(),
            qty or 1,
            self.get_cartable_price(),
            options if isinstance(options, Mapping) else {},
            associated=cartable_tag(self),
        )

    def has_in_cart(self, cart, instance: Optional[str] = None, options: Optional[Mapping[str, Any]] = None) -> bool:
        return bool(self.search_in_cart(cart, instance, options))

    def all_from_cart(self, cart, instance: Optional[str] = None):
        return self.search_in_cart(cart, instance)

    def search_in_cart(self, cart, instance: Optional[str] = None, options: Optional[Mapping[str, Any]] = None):
        return cart.instance(instance).search(
            {
                "id": self.get_cartable_id(),
                "options": dict(options or {}),
                "associated": cartable_tag(self),
            }
        )

    @classmethod
    def find_by_id(cls, pk: Any):
        manager = getattr(cls, "_default_manager", None)
        if manager is None:
            raise InvalidModel(f"{cartable_tag(cls)} does not implement find_by_id().")
        return manager.filter(pk=pk).first()


def associated_model(item: Item):
    """Load the domain object an item was added from."""
    if not item.associated:
        raise InvalidModel(f"The cart item {item.hash} has no associated model.")
    try:
        model = apps.get_model(item.associated)
    except (LookupError, ValueError):
        raise InvalidModel(f"The supplied associated model {item.associated} does not exist.") from None

    finder = getattr(model, "find_by_id", None)
    obj = finder(item.id) if finder else model._default_manager.filter(pk=item.id).first()
    if obj is None:
        raise InvalidModel(f"No {item.associated} with id {item.id} for cart item {item.hash}.")
    return obj
