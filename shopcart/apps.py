# shopcart/apps.py
from __future__ import annotations

from django.apps import AppConfig


class ShopcartConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "shopcart"

    def ready(self) -> None:
        # Import signal receivers
        from . import receivers  # noqa: F401
