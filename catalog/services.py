"""
Catalog — Service Layer

Create, read, edit and delete spare parts. Deleting a part cascades to
its whole movement history inside the same transaction.

@file catalog/services.py
"""

import logging

from django.db import IntegrityError, transaction

from core.constants import PART_CATEGORY_MAX_LENGTH, PART_NAME_MAX_LENGTH, UNSET
from core.db import atomic
from core.exceptions import DuplicateResourceError, ResourceNotFoundError
from core.validators import clean_price, clean_quantity, clean_text

from .models import Part

logger = logging.getLogger('sims')


class PartService:
    """Catalog management for Part."""

    @staticmethod
    @atomic
    def create_part(*, name, category, quantity, unit_price, actor=None) -> Part:
        name = clean_text(name, 'Name', PART_NAME_MAX_LENGTH)
        category = clean_text(category, 'Category', PART_CATEGORY_MAX_LENGTH)
        quantity = clean_quantity(quantity)
        unit_price = clean_price(unit_price)

        if Part.objects.filter(name=name).exists():
            raise DuplicateResourceError(detail='Spare part with this name already exists.')

        try:
            with transaction.atomic():
                part = Part.objects.create(
                    name=name,
                    category=category,
                    quantity=quantity,
                    unit_price=unit_price,
                )
        except IntegrityError:
            raise DuplicateResourceError(detail='Spare part with this name already exists.')

        logger.info('Part %s created by %s qty=%s price=%s', name, actor, quantity, unit_price)
        return part

    @staticmethod
    def get_part(*, name) -> Part:
        try:
            return Part.objects.get(name=name)
        except Part.DoesNotExist:
            raise ResourceNotFoundError(detail='Spare part not found.')

    @staticmethod
    def list_parts():
        return Part.objects.order_by('name')

    @staticmethod
    @atomic
    def update_part(
        *,
        name,
        category=UNSET,
        quantity=UNSET,
        unit_price=UNSET,
        actor=None,
    ) -> Part:
        """
        Edit catalog fields. Omitted fields are left as they are. A direct
        quantity edit re-bases the part; movement history is not touched.
        """
        try:
            part = Part.objects.select_for_update().get(name=name)
        except Part.DoesNotExist:
            raise ResourceNotFoundError(detail='Spare part not found.')

        update_fields = ['updated_at']
        if category is not UNSET:
            part.category = clean_text(category, 'Category', PART_CATEGORY_MAX_LENGTH)
            update_fields.append('category')
        if quantity is not UNSET:
            part.quantity = clean_quantity(quantity)
            update_fields.append('quantity')
        if unit_price is not UNSET:
            part.unit_price = clean_price(unit_price)
            update_fields.append('unit_price')

        part.save(update_fields=update_fields)
        logger.info('Part %s updated by %s fields=%s', name, actor, update_fields[1:])
        return part

    @staticmethod
    @atomic
    def delete_part(*, name, actor=None) -> dict:
        """
        Delete a part and, irreversibly, every stock-in and stock-out
        movement that references it.
        """
        try:
            part = Part.objects.select_for_update().get(name=name)
        except Part.DoesNotExist:
            raise ResourceNotFoundError(detail='Spare part not found.')

        stock_in_count = part.stock_ins.count()
        stock_out_count = part.stock_outs.count()
        part.delete()

        logger.warning(
            'Part %s deleted by %s with %d stock-in and %d stock-out movements.',
            name, actor, stock_in_count, stock_out_count,
        )
        return {
            'name': name,
            'stock_in_deleted': stock_in_count,
            'stock_out_deleted': stock_out_count,
        }
