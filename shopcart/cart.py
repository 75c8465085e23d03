# shopcart/cart.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Union

from . import conf
from .exceptions import InvalidHash
from .item import Item, clean_attributes, dump_content, to_number
from .session import DjangoSessionStore, SessionStore
from .signals import CartEvent, CartPayload, EventDispatcher, SignalDispatcher

log = logging.getLogger(__name__)

Content = Dict[str, Item]
Filter = Union[Callable[[Item], Any], Mapping[str, Any]]


class Cart:
    """
    Session-backed cart split into named instances.

    Each instance lives under its own session key ("cart.<instance>") as an
    ordered mapping of item hash -> item fields:
        {
          "5d41402abc4b2a76b9719d911017c592": {"id": 12, "title": "Tee", "qty": 2, ...},
          ...
        }

    Items with the same id, associated type and options share a hash, so
    adding one twice raises the quantity instead of adding a second line.
    """

    def __init__(
        self,
        session: SessionStore,
        events: Optional[EventDispatcher] = None,
        *,
        title_mode: Optional[str] = None,
    ):
        self.session = session
        self.events = events if events is not None else SignalDispatcher(sender=type(self))
        self.title_mode = title_mode or conf.title_update_mode()
        self.instance()

    @classmethod
    def from_request(cls, request, instance: Optional[str] = None) -> "Cart":
        return cls(DjangoSessionStore(request.session)).instance(instance)

    # --------------- instances ---------------

    def instance(self, instance: Optional[str] = None) -> "Cart":
        instance = instance or conf.default_instance()
        self._instance = f"{conf.SESSION_PREFIX}{instance}"
        return self

    def get_instance(self) -> str:
        return self._instance[len(conf.SESSION_PREFIX):]

    # --------------- public API ---------------

    def add(
        self,
        item_id: Any,
        title: str = "",
        qty: Any = 1,
        price: Any = 0.0,
        options: Optional[Mapping[str, Any]] = None,
        associated: Optional[str] = None,
    ) -> Item:
        item = self._gen_item(item_id, title, qty, price, options, associated)

        content = self._get_content()

        if item.hash in content:
            # same line already in the cart: bump its quantity
            log.debug("cart %s: merging qty for %s", self.get_instance(), item.hash)
            return self._update_qty(item.hash, content[item.hash].qty + item.qty)

        self._fire(CartEvent.ADDING, _snapshot(content), item)

        content[item.hash] = item
        self._update_cart_session(content)
        log.debug("cart %s: added %s (id=%s qty=%s)", self.get_instance(), item.hash, item.id, item.qty)

        self._fire(CartEvent.ADDED, content, item)
        return item

    def update(self, item_hash: str, attributes: Optional[Mapping[str, Any]] = None) -> Optional[Item]:
        attributes = clean_attributes(attributes) if isinstance(attributes, Mapping) else {}
        return self._update_item(item_hash, attributes)

    def remove(self, item_hash: str) -> "Cart":
        content = self._get_content()

        if item_hash in content:
            item = content[item_hash]

            self._fire(CartEvent.REMOVING, _snapshot(content), item.copy())

            del content[item_hash]
            self._update_cart_session(content)
            log.debug("cart %s: removed %s", self.get_instance(), item_hash)

            self._fire(CartEvent.REMOVED, content, item)

        return self

    def all(self) -> Content:
        return self._get_content()

    def content(self) -> Content:
        return self.all()

    def get(self, item_hash: str) -> Item:
        content = self._get_content()
        if item_hash not in content:
            raise InvalidHash(item_hash)
        return content[item_hash]

    def find(self, item_hash: str) -> Item:
        return self.get(item_hash)

    def destroy(self) -> "Cart":
        content = self._get_content()

        self._fire(CartEvent.DESTROYING, content)

        self.session.remove(self._instance)
        log.debug("cart %s: destroyed (%d items)", self.get_instance(), len(content))

        self._fire(CartEvent.DESTROYED, content)
        return self

    def remove_all(self) -> "Cart":
        return self.destroy()

    def total(self) -> float:
        content = self._get_content()
        if not content:
            return 0
        return sum(item.subtotal for item in content.values())

    def count(self, total_items: bool = True) -> int:
        content = self._get_content()
        if not total_items:
            return len(content)
        return sum(item.qty for item in content.values())

    def count_items(self) -> int:
        return self.count(False)

    def count_quantities(self) -> int:
        return self.count(True)

    def search(self, filter: Filter, all_scope: bool = True) -> Content:
        """
        Filter the cart items.

        - a callable is used as a predicate on each item;
        - a mapping with ``all_scope`` matches items whose fields equal every
          given value (``options`` entries compared one by one);
        - a mapping without ``all_scope`` matches items sharing any field or
          any option with the filter.

        Anything else matches nothing.
        """
        if callable(filter):
            return {h: item for h, item in self._get_content().items() if filter(item)}

        if isinstance(filter, Mapping) and all_scope:
            return {h: item for h, item in self._get_content().items() if _matches_all(item, filter)}

        if isinstance(filter, Mapping):
            return {h: item for h, item in self._get_content().items() if _matches_any(item, filter)}

        return {}

    # --------------- private helpers ---------------

    def _get_content(self) -> Content:
        if not self.session.has(self._instance):
            return {}

        raw = self.session.get(self._instance)
        if not isinstance(raw, Mapping):
            log.warning("cart %s: ignoring malformed session blob (%s)", self.get_instance(), type(raw).__name__)
            return {}

        content: Content = {}
        for item_hash, data in raw.items():
            try:
                content[item_hash] = data if isinstance(data, Item) else Item.from_dict(data)
            except (KeyError, TypeError, ValueError):
                log.warning("cart %s: dropping unreadable entry %s", self.get_instance(), item_hash)
        return content

    def _update_qty(self, item_hash: str, qty: int) -> Optional[Item]:
        return self._update_item(item_hash, {"qty": qty})

    def _update_item(self, item_hash: str, attributes: Dict[str, Any]) -> Optional[Item]:
        if "qty" in attributes and int(to_number(attributes["qty"]) or 0) <= 0:
            self.remove(item_hash)
            return None

        content = self._get_content()
        if item_hash not in content:
            raise InvalidHash(item_hash)

        item = content[item_hash]

        self._fire(CartEvent.UPDATING, _snapshot(content), item.copy())

        del content[item_hash]
        item.update(attributes, title_mode=self.title_mode)

        if item.hash in content:
            # new options collide with another line: fold it in
            existing = content[item.hash]
            item.update({"qty": existing.qty + item.qty})

        content[item.hash] = item
        self._update_cart_session(content)
        log.debug("cart %s: updated %s -> %s", self.get_instance(), item_hash, item.hash)

        self._fire(CartEvent.UPDATED, content, item)
        return item

    def _update_cart_session(self, content: Content) -> None:
        self.session.put(self._instance, dump_content(content))

    def _gen_item(self, item_id, title, qty, price, options=None, associated=None) -> Item:
        return Item.init(item_id, title, qty, price, options, associated)

    def _fire(self, event: CartEvent, content: Content, item: Optional[Item] = None) -> None:
        self.events.fire(event, CartPayload(instance=self.get_instance(), content=content, item=item))

    def __repr__(self) -> str:
        return f"<Cart instance={self.get_instance()!r}>"


def _snapshot(content: Content) -> Content:
    return {item_hash: item.copy() for item_hash, item in content.items()}


def _matches_all(item: Item, filter: Mapping[str, Any]) -> bool:
    fields = item.to_dict()
    for key, value in filter.items():
        if key == "options":
            for opt_key, opt_value in (value or {}).items():
                if opt_key not in item.options or item.options[opt_key] != opt_value:
                    return False
        elif key not in fields or fields[key] != value:
            return False
    return True


def _matches_any(item: Item, filter: Mapping[str, Any]) -> bool:
    fields = item.to_dict()
    attr_hit = any(k in fields and fields[k] == v for k, v in filter.items() if k != "options")
    option_hit = not item.options.intersect(filter.get("options") or {}).is_empty
    return attr_hit or option_hit
