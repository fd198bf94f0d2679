"""
Stock — Filters

Ledger listing filters: by part, exact date or date range.

@file stock/filters.py
"""

import django_filters

from .models import StockIn, StockOut


class MovementFilter(django_filters.FilterSet):
    spare_part = django_filters.CharFilter(field_name='spare_part')
    date = django_filters.DateFilter(field_name='date')
    date_from = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='date', lookup_expr='lte')


class StockInFilter(MovementFilter):
    class Meta:
        model = StockIn
        fields = ['spare_part', 'date', 'date_from', 'date_to']


class StockOutFilter(MovementFilter):
    class Meta:
        model = StockOut
        fields = ['spare_part', 'date', 'date_from', 'date_to']
