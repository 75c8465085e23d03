# shopcart/item.py
from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from .conf import TITLE_LITERAL, TITLE_VALUE
from .exceptions import InvalidArgument

UPDATABLE_FIELDS = ("title", "qty", "price", "options")

Number = Union[int, float, Decimal, str]


class ItemOptions(dict):
    """
    Flat key/value options of a cart item, such as size or colour.

    Options read like attributes as well as keys:
        opts = ItemOptions({"size": "M"})
        opts.size == opts["size"] == "M"
    """

    def __getattr__(self, key: str) -> Any:
        if key.startswith("__"):
            raise AttributeError(key)
        try:
            return self[key]
        except KeyError:
            raise AttributeError(f"No option named '{key}'") from None

    def merge(self, other: Optional[Mapping[str, Any]]) -> "ItemOptions":
        merged = ItemOptions(self)
        merged.update(other or {})
        return merged

    def intersect(self, other: Optional[Mapping[str, Any]]) -> "ItemOptions":
        other = other or {}
        return ItemOptions((k, v) for k, v in self.items() if k in other and other[k] == v)

    @property
    def is_empty(self) -> bool:
        return not self


def to_number(value: Any) -> Optional[float]:
    # bools are ints in Python but never a quantity or a price
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


OPTION_VALUE_TYPES = (str, int, float, bool, type(None))


def clean_options(options: Any) -> ItemOptions:
    """Options are flat: string keys, scalar values."""
    if options is None:
        return ItemOptions()
    if not isinstance(options, Mapping):
        raise InvalidArgument("The item options argument must be a mapping.")
    cleaned = ItemOptions()
    for key, value in options.items():
        if isinstance(value, Decimal):
            value = float(value)
        if not isinstance(value, OPTION_VALUE_TYPES):
            raise InvalidArgument(f"The item option '{key}' must be a scalar value.")
        cleaned[str(key)] = value
    return cleaned


def clean_attributes(attributes: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep the updatable attributes, rejecting bad options and prices."""
    cleaned = {k: v for k, v in attributes.items() if k in UPDATABLE_FIELDS}
    if "options" in cleaned:
        cleaned["options"] = clean_options(cleaned["options"])
    if "price" in cleaned:
        price = to_number(cleaned["price"])
        if price is None or price < 0:
            raise InvalidArgument("The item price argument must be a number greater than or equal to 0.")
        cleaned["price"] = price
    return cleaned


def gen_hash(item_id: Any, associated: Optional[str], options: Optional[Mapping[str, Any]] = None) -> str:
    """
    Identity of a cart item: the same (id, associated, options) always yields
    the same hash, whatever the insertion order of the option keys.
    """
    ordered = sorted(((str(k), v) for k, v in (options or {}).items()), key=lambda kv: kv[0])
    blob = json.dumps([str(item_id), associated, ordered], sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.md5(blob.encode("utf-8")).hexdigest()


def calc_subtotal(qty: int, price: float) -> float:
    return int(qty) * float(price)


@dataclass
class Item:
    hash: str
    id: Any
    title: str
    qty: int
    price: float
    subtotal: float
    options: ItemOptions = field(default_factory=ItemOptions)
    associated: Optional[str] = None

    @classmethod
    def init(
        cls,
        item_id: Any,
        title: str,
        qty: Number = 1,
        price: Number = 0.0,
        options: Optional[Mapping[str, Any]] = None,
        associated: Optional[str] = None,
    ) -> "Item":
        """Validate the raw arguments and build a well-formed item."""
        if item_id is None or (isinstance(item_id, str) and not item_id.strip()):
            raise InvalidArgument("The item identifier argument is not allowed to be empty.")

        if not title:
            raise InvalidArgument("The item title argument is not allowed to be empty.")

        qty_num = to_number(qty)
        if qty_num is None or qty_num < 1:
            raise InvalidArgument("The item quantity argument must be a number greater than or equal to 1.")

        price_num = to_number(price)
        if price_num is None or price_num < 0:
            raise InvalidArgument("The item price argument must be a number greater than or equal to 0.")

        opts = clean_options(options)
        quantity = int(qty_num)
        return cls(
            hash=gen_hash(item_id, associated, opts),
            id=item_id,
            title=title,
            qty=quantity,
            price=price_num,
            subtotal=calc_subtotal(quantity, price_num),
            options=opts,
            associated=associated,
        )

    def update(self, attributes: Mapping[str, Any], title_mode: str = TITLE_LITERAL) -> "Item":
        """
        Apply title/qty/price/options changes; hash, id, subtotal and
        associated cannot be set from outside.

        In "literal" title mode the title becomes the title-cased key name
        ("Title"), matching the behaviour carts were historically persisted
        with. "value" mode title-cases the supplied value instead.
        """
        attributes = clean_attributes(attributes)

        for key, value in attributes.items():
            if key == "options":
                self.options = self.options.merge(value)
            elif key == "qty":
                self.qty = int(to_number(value) or 0)
            elif key == "price":
                self.price = value
            elif key == "title":
                self.title = str(value).title() if title_mode == TITLE_VALUE else key.title()

        if "qty" in attributes or "price" in attributes:
            self.subtotal = calc_subtotal(self.qty, self.price)

        if "options" in attributes:
            self.hash = gen_hash(self.id, self.associated, self.options)

        return self

    def has(self, name: str) -> bool:
        return name in self.to_dict()

    def copy(self) -> "Item":
        return replace(self, options=ItemOptions(self.options))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self.hash,
            "id": self.id,
            "title": self.title,
            "qty": self.qty,
            "price": self.price,
            "subtotal": self.subtotal,
            "options": dict(self.options),
            "associated": self.associated,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        return cls(
            hash=data["hash"],
            id=data["id"],
            title=data["title"],
            qty=int(data["qty"]),
            price=float(data["price"]),
            subtotal=float(data["subtotal"]),
            options=ItemOptions(data.get("options") or {}),
            associated=data.get("associated"),
        )


def dump_content(content: Mapping[str, Item]) -> Dict[str, Dict[str, Any]]:
    return {item_hash: item.to_dict() for item_hash, item in content.items()}

