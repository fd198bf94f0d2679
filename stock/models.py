"""
Stock — Models

The movement ledger: one table for stock-in and one for stock-out. Each
row is a fixed quantity delta against a spare part on a calendar date.
Rows may be edited (quantity, date, sale price) or deleted, but only
through StockService, which keeps Part.quantity reconciled in the same
transaction.

@file stock/models.py
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.exceptions import InvalidOperationError
from core.models import CreatedAtMixin

from .managers import MovementQuerySet, StockOutQuerySet


class Movement(CreatedAtMixin):
    """Shared fields and the immutable part reference of a ledger row."""

    quantity = models.PositiveIntegerField(
        _('quantity'), validators=[MinValueValidator(1)],
    )
    date = models.DateField(_('date'), db_index=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if self.pk is not None:
            stored = (
                type(self).objects
                .filter(pk=self.pk)
                .values_list('spare_part_id', flat=True)
                .first()
            )
            if stored is not None and stored != self.spare_part_id:
                raise InvalidOperationError(
                    detail='A movement cannot be moved to another spare part; delete it and record a new one.',
                )
        super().save(*args, **kwargs)


class StockIn(Movement):
    """Incoming stock: increases the referenced part's quantity."""

    spare_part = models.ForeignKey(
        'catalog.Part',
        on_delete=models.CASCADE,
        related_name='stock_ins',
        verbose_name=_('spare part'),
    )

    objects = MovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('stock in')
        verbose_name_plural = _('stock in')
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['spare_part', 'date'], name='stock_in_part_date_idx'),
        ]

    def __str__(self):
        return f'IN {self.quantity} {self.spare_part_id} on {self.date}'


class StockOut(Movement):
    """
    Outgoing stock (a sale). unit_price is the price at the time of sale
    and is independent of the part's current catalog price.
    """

    spare_part = models.ForeignKey(
        'catalog.Part',
        on_delete=models.CASCADE,
        related_name='stock_outs',
        verbose_name=_('spare part'),
    )
    unit_price = models.DecimalField(
        _('unit price'), max_digits=10, decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )

    objects = StockOutQuerySet.as_manager()

    class Meta:
        verbose_name = _('stock out')
        verbose_name_plural = _('stock out')
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['spare_part', 'date'], name='stock_out_part_date_idx'),
        ]

    def __str__(self):
        return f'OUT {self.quantity} {self.spare_part_id} on {self.date}'

    @property
    def total_price(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.unit_price)
