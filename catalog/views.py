"""
Catalog — Views

DRF ViewSet for the spare part catalog. Parts are addressed by name.

@file catalog/views.py
"""

from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.exceptions import InvalidInputError

from .models import Part
from .serializers import PartCreateSerializer, PartReadSerializer, PartUpdateSerializer
from .services import PartService

_TRUTHY = {'1', 'true', 'yes'}


class PartViewSet(viewsets.ModelViewSet):
    """
    CRUD for spare parts.

    Deleting a part destroys its stock-in and stock-out history, so the
    request must carry ?confirm=true.
    """

    permission_classes = [IsAuthenticated]
    lookup_field = 'name'
    lookup_value_regex = '[^/]+'
    filterset_fields = ['category']
    search_fields = ['name', 'category']
    ordering_fields = ['name', 'category', 'quantity', 'unit_price', 'updated_at']
    ordering = ['name']

    def get_queryset(self):
        return PartService.list_parts()

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return PartReadSerializer
        if self.action == 'create':
            return PartCreateSerializer
        return PartUpdateSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        part = PartService.create_part(actor=request.user, **serializer.validated_data)
        return Response(PartReadSerializer(part).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        part = PartService.update_part(
            name=instance.name,
            actor=request.user,
            **serializer.validated_data,
        )
        return Response(PartReadSerializer(part).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        if request.query_params.get('confirm', '').lower() not in _TRUTHY:
            raise InvalidInputError(
                detail=(
                    f'Deleting {instance.name} also deletes '
                    f'{instance.stock_ins.count()} stock-in and '
                    f'{instance.stock_outs.count()} stock-out records. '
                    'Repeat the request with ?confirm=true to proceed.'
                ),
            )
        result = PartService.delete_part(name=instance.name, actor=request.user)
        return Response(result, status=status.HTTP_200_OK)
