"""
Stock — Service Layer

Reconciliation of Part.quantity with the movement ledger. StockService is
the only code that changes a part's quantity as a side effect of a
stock-in or stock-out being recorded, edited or deleted.

Every operation runs in one transaction. Locks are always taken Part row
first, then movement row (the order a cascading part delete uses), so
concurrent writers on the same part serialize without deadlocking. When
a movement is the entry point its part is looked up unlocked, the part
is locked, and the movement is then locked and re-read. Any failure
rolls back every write of the operation.

@file stock/services.py
"""

import logging

from catalog.models import Part
from core.constants import UNSET
from core.db import atomic
from core.exceptions import (
    InsufficientStockError,
    InvalidOperationError,
    ResourceNotFoundError,
)
from core.validators import clean_date, clean_price, clean_quantity

from .models import StockIn, StockOut

logger = logging.getLogger('sims')


def _lock_part(name) -> Part:
    try:
        return Part.objects.select_for_update().get(name=name)
    except Part.DoesNotExist:
        raise ResourceNotFoundError(detail='Spare part not found.')


def _lock_movement(model, movement_id, label: str):
    """Lock a movement and its part, part first. Returns (movement, part)."""
    not_found = ResourceNotFoundError(detail=f'{label} record not found.')
    try:
        part_name = (
            model.objects
            .filter(pk=movement_id)
            .values_list('spare_part_id', flat=True)
            .get()
        )
    except (model.DoesNotExist, ValueError, TypeError):
        raise not_found

    try:
        part = Part.objects.select_for_update().get(name=part_name)
        movement = model.objects.select_for_update().get(pk=movement_id, spare_part=part)
    except (Part.DoesNotExist, model.DoesNotExist):
        # Deleted between the lookup and the lock.
        raise not_found
    movement.spare_part = part
    return movement, part


def _set_quantity(part: Part, quantity: int) -> None:
    part.quantity = quantity
    part.save(update_fields=['quantity', 'updated_at'])


class StockService:
    """Stock-in / stock-out recording and reconciliation."""

    # --- Ledger reads ---

    @staticmethod
    def get_stock_in(*, stock_in_id) -> StockIn:
        try:
            return StockIn.objects.select_related('spare_part').get(pk=stock_in_id)
        except (StockIn.DoesNotExist, ValueError, TypeError):
            raise ResourceNotFoundError(detail='Stock in record not found.')

    @staticmethod
    def get_stock_out(*, stock_out_id) -> StockOut:
        try:
            return StockOut.objects.select_related('spare_part').get(pk=stock_out_id)
        except (StockOut.DoesNotExist, ValueError, TypeError):
            raise ResourceNotFoundError(detail='Stock out record not found.')

    @staticmethod
    def list_stock_in(*, spare_part_name=None, date_from=None, date_to=None):
        qs = StockIn.objects.select_related('spare_part')
        if spare_part_name is not None:
            qs = qs.for_part(spare_part_name)
        return qs.between(date_from, date_to).ledger_order()

    @staticmethod
    def list_stock_out(*, spare_part_name=None, date_from=None, date_to=None):
        qs = StockOut.objects.select_related('spare_part')
        if spare_part_name is not None:
            qs = qs.for_part(spare_part_name)
        return qs.between(date_from, date_to).ledger_order()

    # --- Stock in ---

    @staticmethod
    @atomic
    def create_stock_in(*, spare_part_name, quantity, date, actor=None) -> StockIn:
        """Record incoming stock and add it to the part's quantity."""
        quantity = clean_quantity(quantity, minimum=1)
        date = clean_date(date)

        part = _lock_part(spare_part_name)
        new_quantity = part.quantity + quantity

        movement = StockIn.objects.create(spare_part=part, quantity=quantity, date=date)
        _set_quantity(part, new_quantity)

        logger.info(
            'StockIn %s part=%s qty=%s by %s; part quantity now %s',
            movement.pk, part.name, quantity, actor, new_quantity,
        )
        return movement

    @staticmethod
    @atomic
    def update_stock_in(*, stock_in_id, quantity=UNSET, date=UNSET, actor=None) -> StockIn:
        """
        Change a stock-in's quantity and/or date; omitted fields keep their
        stored value. The part absorbs the difference; refused if that
        would leave it negative.
        """
        if quantity is not UNSET:
            quantity = clean_quantity(quantity, minimum=1)
        if date is not UNSET:
            date = clean_date(date)

        movement, part = _lock_movement(StockIn, stock_in_id, 'Stock in')
        if quantity is UNSET:
            quantity = movement.quantity
        if date is UNSET:
            date = movement.date

        candidate = part.quantity + (quantity - movement.quantity)
        if candidate < 0:
            raise InvalidOperationError(
                detail=(
                    'Cannot reduce stock in quantity: would result in negative quantity '
                    f'(available {part.quantity}, change {quantity - movement.quantity}).'
                ),
            )

        old_quantity = movement.quantity
        movement.quantity = quantity
        movement.date = date
        movement.save(update_fields=['quantity', 'date'])
        _set_quantity(part, candidate)

        logger.info(
            'StockIn %s updated by %s qty %s -> %s; part %s quantity now %s',
            movement.pk, actor, old_quantity, quantity, part.name, candidate,
        )
        return movement

    @staticmethod
    @atomic
    def delete_stock_in(*, stock_in_id, actor=None) -> int:
        """Remove a stock-in and take its quantity back out. Returns the new part quantity."""
        movement, part = _lock_movement(StockIn, stock_in_id, 'Stock in')

        candidate = part.quantity - movement.quantity
        if candidate < 0:
            raise InvalidOperationError(
                detail=(
                    'Cannot delete stock in record: would result in negative quantity '
                    f'(available {part.quantity}, record {movement.quantity}).'
                ),
            )

        movement_id = movement.pk
        movement.delete()
        _set_quantity(part, candidate)

        logger.info(
            'StockIn %s deleted by %s; part %s quantity now %s',
            movement_id, actor, part.name, candidate,
        )
        return candidate

    # --- Stock out ---

    @staticmethod
    @atomic
    def create_stock_out(*, spare_part_name, quantity, unit_price, date, actor=None) -> StockOut:
        """
        Record a sale at the given unit price. Fails with
        InsufficientStockError if the part does not hold enough stock.
        """
        quantity = clean_quantity(quantity, minimum=1)
        unit_price = clean_price(unit_price)
        date = clean_date(date)

        part = _lock_part(spare_part_name)
        if part.quantity < quantity:
            raise InsufficientStockError(
                detail=f'Insufficient stock. Available quantity: {part.quantity}',
            )

        new_quantity = part.quantity - quantity
        movement = StockOut.objects.create(
            spare_part=part,
            quantity=quantity,
            unit_price=unit_price,
            date=date,
        )
        _set_quantity(part, new_quantity)

        logger.info(
            'StockOut %s part=%s qty=%s price=%s by %s; part quantity now %s',
            movement.pk, part.name, quantity, unit_price, actor, new_quantity,
        )
        return movement

    @staticmethod
    @atomic
    def update_stock_out(
        *,
        stock_out_id,
        quantity=UNSET,
        unit_price=UNSET,
        date=UNSET,
        actor=None,
    ) -> StockOut:
        """
        Change a stock-out's quantity, sale price and date; omitted fields
        keep their stored value. Raising the quantity consumes more stock
        and is refused if the part cannot cover it. A given sale price
        replaces the stored one.
        """
        if quantity is not UNSET:
            quantity = clean_quantity(quantity, minimum=1)
        if unit_price is not UNSET:
            unit_price = clean_price(unit_price)
        if date is not UNSET:
            date = clean_date(date)

        movement, part = _lock_movement(StockOut, stock_out_id, 'Stock out')
        if quantity is UNSET:
            quantity = movement.quantity
        if unit_price is UNSET:
            unit_price = movement.unit_price
        if date is UNSET:
            date = movement.date

        candidate = part.quantity + (movement.quantity - quantity)
        if candidate < 0:
            raise InvalidOperationError(
                detail=(
                    'Cannot increase stock out quantity: would result in negative quantity '
                    f'(available {part.quantity}, change {quantity - movement.quantity}).'
                ),
            )

        old_quantity = movement.quantity
        movement.quantity = quantity
        movement.unit_price = unit_price
        movement.date = date
        movement.save(update_fields=['quantity', 'unit_price', 'date'])
        _set_quantity(part, candidate)

        logger.info(
            'StockOut %s updated by %s qty %s -> %s price=%s; part %s quantity now %s',
            movement.pk, actor, old_quantity, quantity, unit_price, part.name, candidate,
        )
        return movement

    @staticmethod
    @atomic
    def delete_stock_out(*, stock_out_id, actor=None) -> int:
        """Remove a sale and return its quantity to stock. Returns the new part quantity."""
        movement, part = _lock_movement(StockOut, stock_out_id, 'Stock out')

        new_quantity = part.quantity + movement.quantity
        movement_id = movement.pk
        movement.delete()
        _set_quantity(part, new_quantity)

        logger.info(
            'StockOut %s deleted by %s; part %s quantity now %s',
            movement_id, actor, part.name, new_quantity,
        )
        return new_quantity
