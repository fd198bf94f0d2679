"""
Stock — Views

DRF ViewSets for the stock-in and stock-out ledgers. Listing and
retrieval read the ledger; every write is delegated to StockService so
that the part's quantity is reconciled in the same transaction.

@file stock/views.py
"""

from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.constants import UNSET

from .filters import StockInFilter, StockOutFilter
from .serializers import (
    StockInCreateSerializer,
    StockInReadSerializer,
    StockInUpdateSerializer,
    StockOutCreateSerializer,
    StockOutReadSerializer,
    StockOutUpdateSerializer,
)
from .services import StockService

LEDGER_ORDERING = ['-date', '-created_at', '-id']


class StockInViewSet(viewsets.ModelViewSet):
    """Incoming stock records."""

    permission_classes = [IsAuthenticated]
    filterset_class = StockInFilter
    search_fields = ['spare_part__name', 'spare_part__category']
    ordering_fields = ['date', 'created_at', 'quantity']
    ordering = LEDGER_ORDERING

    def get_queryset(self):
        return StockService.list_stock_in()

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return StockInReadSerializer
        if self.action == 'create':
            return StockInCreateSerializer
        return StockInUpdateSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        movement = StockService.create_stock_in(
            spare_part_name=data['spare_part'],
            quantity=data['quantity'],
            date=data['date'],
            actor=request.user,
        )
        return Response(StockInReadSerializer(movement).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        movement = StockService.update_stock_in(
            stock_in_id=instance.pk,
            quantity=data.get('quantity', UNSET),
            date=data.get('date', UNSET),
            actor=request.user,
        )
        return Response(StockInReadSerializer(movement).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        part_quantity = StockService.delete_stock_in(stock_in_id=instance.pk, actor=request.user)
        return Response({
            'id': instance.pk,
            'spare_part': instance.spare_part_id,
            'part_quantity': part_quantity,
        })


class StockOutViewSet(viewsets.ModelViewSet):
    """Outgoing stock (sales) records."""

    permission_classes = [IsAuthenticated]
    filterset_class = StockOutFilter
    search_fields = ['spare_part__name', 'spare_part__category']
    ordering_fields = ['date', 'created_at', 'quantity', 'unit_price']
    ordering = LEDGER_ORDERING

    def get_queryset(self):
        return StockService.list_stock_out()

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return StockOutReadSerializer
        if self.action == 'create':
            return StockOutCreateSerializer
        return StockOutUpdateSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        movement = StockService.create_stock_out(
            spare_part_name=data['spare_part'],
            quantity=data['quantity'],
            unit_price=data['unit_price'],
            date=data['date'],
            actor=request.user,
        )
        return Response(StockOutReadSerializer(movement).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        movement = StockService.update_stock_out(
            stock_out_id=instance.pk,
            quantity=data.get('quantity', UNSET),
            unit_price=data.get('unit_price', UNSET),
            date=data.get('date', UNSET),
            actor=request.user,
        )
        return Response(StockOutReadSerializer(movement).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        part_quantity = StockService.delete_stock_out(stock_out_id=instance.pk, actor=request.user)
        return Response({
            'id': instance.pk,
            'spare_part': instance.spare_part_id,
            'part_quantity': part_quantity,
        })
