"""
Catalog — Serializers

Read serializer for Part and plain write serializers. Writes go through
PartService, so duplicate names surface as 409 from the service rather
than as a serializer uniqueness error.

@file catalog/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import PART_CATEGORY_MAX_LENGTH, PART_NAME_MAX_LENGTH, PRICE_MAX_DIGITS

from .models import Part

__all__ = [
    'PartReadSerializer',
    'PartCreateSerializer',
    'PartUpdateSerializer',
]


class PartReadSerializer(serializers.ModelSerializer):
    total_value = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Part
        fields = [
            'name', 'category', 'quantity', 'unit_price', 'total_value',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PartUpdateSerializer(serializers.Serializer):
    category = serializers.CharField(max_length=PART_CATEGORY_MAX_LENGTH)
    quantity = serializers.IntegerField(min_value=0)
    unit_price = serializers.DecimalField(max_digits=PRICE_MAX_DIGITS, decimal_places=2, min_value=Decimal('0'))


class PartCreateSerializer(PartUpdateSerializer):
    name = serializers.CharField(max_length=PART_NAME_MAX_LENGTH)

    def validate_name(self, value):
        if '/' in value:
            raise serializers.ValidationError('Name cannot contain "/".')
        return value
