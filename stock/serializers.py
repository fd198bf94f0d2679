"""
Stock — Serializers

Read serializers carry the part's category and current quantity next to
each ledger row; stock-out rows also show the part's current catalog
price beside the historical sale price. Write serializers only shape
input: every write goes through StockService.

@file stock/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from .models import StockIn, StockOut

__all__ = [
    'StockInReadSerializer',
    'StockInCreateSerializer',
    'StockInUpdateSerializer',
    'StockOutReadSerializer',
    'StockOutCreateSerializer',
    'StockOutUpdateSerializer',
]

_PRICE = {'max_digits': 10, 'decimal_places': 2, 'min_value': Decimal('0')}


# ---------------------------------------------------------------------------
# Stock in
# ---------------------------------------------------------------------------

class StockInReadSerializer(serializers.ModelSerializer):
    category = serializers.CharField(source='spare_part.category', read_only=True)
    part_quantity = serializers.IntegerField(source='spare_part.quantity', read_only=True)

    class Meta:
        model = StockIn
        fields = [
            'id', 'spare_part', 'category', 'quantity', 'date',
            'part_quantity', 'created_at',
        ]
        read_only_fields = fields


class StockInUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
    date = serializers.DateField()


class StockInCreateSerializer(StockInUpdateSerializer):
    spare_part = serializers.CharField(max_length=100)


# ---------------------------------------------------------------------------
# Stock out
# ---------------------------------------------------------------------------

class StockOutReadSerializer(serializers.ModelSerializer):
    category = serializers.CharField(source='spare_part.category', read_only=True)
    current_unit_price = serializers.DecimalField(
        source='spare_part.unit_price', max_digits=10, decimal_places=2, read_only=True,
    )
    total_price = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    part_quantity = serializers.IntegerField(source='spare_part.quantity', read_only=True)

    class Meta:
        model = StockOut
        fields = [
            'id', 'spare_part', 'category', 'quantity', 'unit_price',
            'total_price', 'current_unit_price', 'date',
            'part_quantity', 'created_at',
        ]
        read_only_fields = fields


class StockOutUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(**_PRICE)
    date = serializers.DateField()


class StockOutCreateSerializer(StockOutUpdateSerializer):
    spare_part = serializers.CharField(max_length=100)
