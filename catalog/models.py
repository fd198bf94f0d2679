"""
Catalog — Models

The spare part catalog. Each Part carries the single authoritative
on-hand quantity; movements in the stock app keep it reconciled.

@file catalog/models.py
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import PART_CATEGORY_MAX_LENGTH, PART_NAME_MAX_LENGTH, PRICE_MAX_DIGITS
from core.models import TimestampMixin


class Part(TimestampMixin):
    """
    A catalog entry for one kind of spare component.

    The name is the primary key and is case-sensitive. `quantity` is only
    changed by catalog edits and by StockService when movements are
    recorded, edited or removed.
    """

    name = models.CharField(_('name'), max_length=PART_NAME_MAX_LENGTH, primary_key=True)
    category = models.CharField(_('category'), max_length=PART_CATEGORY_MAX_LENGTH, db_index=True)
    quantity = models.PositiveIntegerField(_('quantity'), default=0)
    unit_price = models.DecimalField(
        _('unit price'), max_digits=PRICE_MAX_DIGITS, decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )

    class Meta:
        verbose_name = _('spare part')
        verbose_name_plural = _('spare parts')
        ordering = ['name']

    def __str__(self):
        return f'{self.name} ({self.category})'

    @property
    def total_value(self) -> Decimal:
        return Decimal(self.quantity) * self.unit_price
