"""
Stock — QuerySets

Ledger queries over StockIn / StockOut: filtering by part and date, the
listing order (newest date first, then newest insert first) and sale
totals computed in SQL.

@file stock/managers.py
"""

from decimal import Decimal

from django.db import models
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce

_TOTAL = DecimalField(max_digits=16, decimal_places=2)


class MovementQuerySet(models.QuerySet):

    def for_part(self, name):
        return self.filter(spare_part_id=name)

    def on_date(self, day):
        return self.filter(date=day)

    def between(self, date_from=None, date_to=None):
        qs = self
        if date_from is not None:
            qs = qs.filter(date__gte=date_from)
        if date_to is not None:
            qs = qs.filter(date__lte=date_to)
        return qs

    def ledger_order(self):
        return self.order_by('-date', '-created_at', '-id')


class StockOutQuerySet(MovementQuerySet):

    def with_total_price(self):
        """Annotate line_total = quantity x unit_price, computed in SQL."""
        return self.annotate(
            line_total=ExpressionWrapper(
                F('quantity') * F('unit_price'),
                output_field=DecimalField(max_digits=14, decimal_places=2),
            ),
        )

    def sales_summary(self) -> dict:
        """Record count, units sold and sale value of the queryset in one query."""
        return self.order_by().with_total_price().aggregate(
            total_records=Count('id'),
            total_quantity=Coalesce(Sum('quantity'), 0),
            total_value=Coalesce(Sum('line_total'), Decimal('0'), output_field=_TOTAL),
        )
