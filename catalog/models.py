# catalog/models.py
from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils.text import slugify

from shopcart.cartable import Shopping


class Product(Shopping, models.Model):
    """A sellable product; ``add_to_cart`` et al. come from Shopping."""

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["title"]

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.title) or "item"
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.title


class GiftCard(Shopping, models.Model):
    """Cartable with non-default title/price fields."""

    name = models.CharField(max_length=120)
    amount = models.DecimalField(max_digits=10, decimal_places=2)

    cart_title_field = "name"
    cart_price_field = "amount"

    def __str__(self) -> str:
        return self.name
