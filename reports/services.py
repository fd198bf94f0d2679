"""
Reports — Service Layer

Read-only projections over the catalog and the movement ledger. Nothing
here writes: the stock status report re-derives per-part totals from
the ledger on every call.

@file reports/services.py
"""

import logging
from decimal import Decimal

from django.conf import settings
from django.db.models import IntegerField, OuterRef, Subquery, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from catalog.models import Part
from core.constants import STOCK_LEVEL_HIGH, STOCK_LEVEL_LOW, STOCK_LEVEL_MEDIUM
from core.validators import clean_date
from stock.models import StockIn, StockOut

logger = logging.getLogger('sims')

_CENT = Decimal('0.01')


def _money(value) -> Decimal:
    return Decimal(value).quantize(_CENT)


def _ledger_total(model):
    """Correlated subquery: SUM(quantity) of `model` rows for the outer part."""
    totals = (
        model.objects
        .filter(spare_part=OuterRef('pk'))
        .order_by()
        .values('spare_part')
        .annotate(total=Sum('quantity'))
        .values('total')
    )
    return Coalesce(Subquery(totals, output_field=IntegerField()), 0)


def stock_level(quantity: int) -> str:
    if quantity < settings.LOW_STOCK_THRESHOLD:
        return STOCK_LEVEL_LOW
    if quantity < settings.MEDIUM_STOCK_THRESHOLD:
        return STOCK_LEVEL_MEDIUM
    return STOCK_LEVEL_HIGH


class ReportService:
    """Daily stock-out and stock status reports."""

    @staticmethod
    def daily_stock_out(*, report_date=None) -> dict:
        """
        Stock-out records dated `report_date` (today when omitted), newest
        first, with count / quantity / value totals. No records is a
        valid, empty report.
        """
        report_date = timezone.localdate() if report_date in (None, '') else clean_date(report_date)

        day = StockOut.objects.on_date(report_date)
        records = list(day.select_related('spare_part').order_by('-created_at', '-id'))
        summary = day.sales_summary()
        summary['total_value'] = _money(summary['total_value'])

        return {
            'report_date': report_date,
            'records': records,
            'summary': summary,
        }

    @staticmethod
    def stock_status() -> dict:
        """
        Per-part current stock against ledger totals, plus roll-ups and
        the low-stock list.

        initial_quantity = current + stock out - stock in is an
        informational reconstruction only; it is never written back.
        """
        parts = (
            Part.objects
            .annotate(
                total_stock_in=_ledger_total(StockIn),
                total_stock_out=_ledger_total(StockOut),
            )
            .order_by('name')
        )

        rows = []
        for part in parts:
            current = max(0, part.quantity)
            rows.append({
                'spare_part': part.name,
                'category': part.category,
                'unit_price': _money(part.unit_price),
                'current_quantity': current,
                'total_stock_in': part.total_stock_in,
                'total_stock_out': part.total_stock_out,
                'initial_quantity': max(0, current + part.total_stock_out - part.total_stock_in),
                'total_value': _money(current * part.unit_price),
                'stock_level': stock_level(current),
                'is_low_stock': current < settings.LOW_STOCK_THRESHOLD,
                'created_at': part.created_at,
                'updated_at': part.updated_at,
            })

        low_stock_items = [row for row in rows if row['is_low_stock']]
        summary = {
            'total_parts': len(rows),
            'total_current_quantity': sum(row['current_quantity'] for row in rows),
            'total_current_value': _money(sum((row['total_value'] for row in rows), Decimal('0'))),
            'total_stock_in': sum(row['total_stock_in'] for row in rows),
            'total_stock_out': sum(row['total_stock_out'] for row in rows),
            'low_stock_items_count': len(low_stock_items),
        }
        return {
            'spare_parts': rows,
            'summary': summary,
            'low_stock_items': low_stock_items,
        }
