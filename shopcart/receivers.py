# shopcart/receivers.py
from __future__ import annotations

import logging

from django.dispatch import receiver

from .signals import cart_added, cart_destroyed, cart_removed, cart_updated

log = logging.getLogger(__name__)


@receiver([cart_added, cart_updated, cart_removed])
def log_item_change(sender, event, instance, item=None, content=None, **kwargs) -> None:
    log.info(
        "%s [%s] hash=%s qty=%s items=%d",
        event.value,
        instance,
        getattr(item, "hash", None),
        getattr(item, "qty", None),
        len(content or {}),
    )


@receiver(cart_destroyed)
def log_cart_destroyed(sender, event, instance, content=None, **kwargs) -> None:
    log.info("%s [%s] dropped %d items", event.value, instance, len(content or {}))
