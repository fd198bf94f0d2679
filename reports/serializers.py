"""
Reports — Serializers

Output-only serializers for the report payloads built by ReportService.

@file reports/serializers.py
"""

from rest_framework import serializers

from stock.serializers import StockOutReadSerializer

_MONEY = {'max_digits': 16, 'decimal_places': 2, 'read_only': True}


class DailyStockOutSummarySerializer(serializers.Serializer):
    total_records = serializers.IntegerField(read_only=True)
    total_quantity = serializers.IntegerField(read_only=True)
    total_value = serializers.DecimalField(**_MONEY)


class DailyStockOutReportSerializer(serializers.Serializer):
    report_date = serializers.DateField(read_only=True)
    records = StockOutReadSerializer(many=True, read_only=True)
    summary = DailyStockOutSummarySerializer(read_only=True)


class StockStatusRowSerializer(serializers.Serializer):
    spare_part = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)
    unit_price = serializers.DecimalField(**_MONEY)
    initial_quantity = serializers.IntegerField(read_only=True)
    total_stock_in = serializers.IntegerField(read_only=True)
    total_stock_out = serializers.IntegerField(read_only=True)
    current_quantity = serializers.IntegerField(read_only=True)
    total_value = serializers.DecimalField(**_MONEY)
    stock_level = serializers.CharField(read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class StockStatusSummarySerializer(serializers.Serializer):
    total_parts = serializers.IntegerField(read_only=True)
    total_current_quantity = serializers.IntegerField(read_only=True)
    total_current_value = serializers.DecimalField(**_MONEY)
    total_stock_in = serializers.IntegerField(read_only=True)
    total_stock_out = serializers.IntegerField(read_only=True)
    low_stock_items_count = serializers.IntegerField(read_only=True)


class StockStatusReportSerializer(serializers.Serializer):
    spare_parts = StockStatusRowSerializer(many=True, read_only=True)
    summary = StockStatusSummarySerializer(read_only=True)
    low_stock_items = StockStatusRowSerializer(many=True, read_only=True)
