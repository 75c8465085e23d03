# shopcart/conf.py
from __future__ import annotations

from django.conf import settings

DEFAULT_INSTANCE = "default"
SESSION_PREFIX = "cart."

TITLE_LITERAL = "literal"
TITLE_VALUE = "value"


def default_instance() -> str:
    return getattr(settings, "CART_DEFAULT_INSTANCE", None) or DEFAULT_INSTANCE


def title_update_mode() -> str:
    mode = (getattr(settings, "CART_TITLE_UPDATE", TITLE_LITERAL) or TITLE_LITERAL).lower()
    if mode not in (TITLE_LITERAL, TITLE_VALUE):
        raise ValueError(f"CART_TITLE_UPDATE must be '{TITLE_LITERAL}' or '{TITLE_VALUE}', got '{mode}'")
    return mode
