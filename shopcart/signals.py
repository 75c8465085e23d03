# shopcart/signals.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from django.dispatch import Signal

# Every signal is sent with keyword arguments: event, instance, item, content.
cart_adding = Signal()
cart_added = Signal()
cart_updating = Signal()
cart_updated = Signal()
cart_removing = Signal()
cart_removed = Signal()
cart_destroying = Signal()
cart_destroyed = Signal()


class CartEvent(str, enum.Enum):
    ADDING = "cart.adding"
    ADDED = "cart.added"
    UPDATING = "cart.updating"
    UPDATED = "cart.updated"
    REMOVING = "cart.removing"
    REMOVED = "cart.removed"
    DESTROYING = "cart.destroying"
    DESTROYED = "cart.destroyed"


SIGNALS: Dict[CartEvent, Signal] = {
    CartEvent.ADDING: cart_adding,
    CartEvent.ADDED: cart_added,
    CartEvent.UPDATING: cart_updating,
    CartEvent.UPDATED: cart_updated,
    CartEvent.REMOVING: cart_removing,
    CartEvent.REMOVED: cart_removed,
    CartEvent.DESTROYING: cart_destroying,
    CartEvent.DESTROYED: cart_destroyed,
}


@dataclass
class CartPayload:
    instance: str
    content: Dict[str, Any] = field(default_factory=dict)
    item: Optional[Any] = None


class EventDispatcher(Protocol):
    def fire(self, event: CartEvent, payload: CartPayload) -> None: ...


class SignalDispatcher:
    """Default dispatcher: one Django signal per cart event."""

    def __init__(self, sender: Any = None):
        self.sender = sender

    def fire(self, event: CartEvent, payload: CartPayload) -> None:
        SIGNALS[event].send(
            sender=self.sender,
            event=event,
            instance=payload.instance,
            item=payload.item,
            content=payload.content,
        )
