"""
Tests — StockService: recording, editing and deleting movements keeps
Part.quantity equal to its starting value plus stock-in minus stock-out.
Failed operations leave no trace.

@file stock/tests/test_services.py
"""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError, connection
from django.db.models import Sum
from django.test.utils import CaptureQueriesContext

from catalog.models import Part
from catalog.services import PartService
from core.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    InvalidOperationError,
    ResourceNotFoundError,
    StorageFailureError,
)
from stock.models import StockIn, StockOut
from stock.services import StockService
from tests.factories import PartFactory


pytestmark = pytest.mark.django_db

DAY = date(2025, 1, 15)


def _quantity(name):
    return Part.objects.get(name=name).quantity


@pytest.fixture
def filter_part():
    """Filter: 10 units at 500.00."""
    return PartService.create_part(
        name='Filter', category='Engine', quantity=10, unit_price=Decimal('500.00'),
    )


class TestStockIn:

    def test_create_adds_to_part(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        assert movement.pk is not None
        assert movement.spare_part_id == 'Filter'
        assert _quantity('Filter') == 15

    def test_create_for_missing_part_raises(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.create_stock_in(spare_part_name='Nope', quantity=5, date=DAY)
        assert StockIn.objects.count() == 0

    @pytest.mark.parametrize('quantity', [0, -3, 1.5, None, 'abc'])
    def test_create_rejects_bad_quantity(self, filter_part, quantity):
        with pytest.raises(InvalidInputError):
            StockService.create_stock_in(spare_part_name='Filter', quantity=quantity, date=DAY)
        assert _quantity('Filter') == 10
        assert StockIn.objects.count() == 0

    def test_create_rejects_bad_date(self, filter_part):
        with pytest.raises(InvalidInputError):
            StockService.create_stock_in(spare_part_name='Filter', quantity=1, date='2025-13-40')

    def test_create_accepts_iso_string_date(self, filter_part):
        movement = StockService.create_stock_in(
            spare_part_name='Filter', quantity=1, date='2025-01-15',
        )
        assert movement.date == DAY

    def test_update_applies_difference(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        StockService.update_stock_in(stock_in_id=movement.pk, quantity=8, date=DAY)
        assert _quantity('Filter') == 18
        StockService.update_stock_in(stock_in_id=movement.pk, quantity=2, date=date(2025, 2, 1))
        assert _quantity('Filter') == 12
        movement.refresh_from_db()
        assert (movement.quantity, movement.date) == (2, date(2025, 2, 1))

    def test_update_refused_when_stock_already_sold(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        StockService.create_stock_out(
            spare_part_name='Filter', quantity=14, unit_price=500, date=DAY,
        )
        with pytest.raises(InvalidOperationError):
            StockService.update_stock_in(stock_in_id=movement.pk, quantity=1, date=DAY)
        movement.refresh_from_db()
        assert movement.quantity == 5
        assert _quantity('Filter') == 1

    def test_update_missing_raises(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.update_stock_in(stock_in_id=999999, quantity=1, date=DAY)

    def test_delete_subtracts(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        assert StockService.delete_stock_in(stock_in_id=movement.pk) == 10
        assert _quantity('Filter') == 10
        assert not StockIn.objects.filter(pk=movement.pk).exists()

    def test_delete_refused_when_it_would_go_negative(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        StockService.create_stock_out(
            spare_part_name='Filter', quantity=12, unit_price=500, date=DAY,
        )
        with pytest.raises(InvalidOperationError):
            StockService.delete_stock_in(stock_in_id=movement.pk)
        assert StockIn.objects.filter(pk=movement.pk).exists()
        assert _quantity('Filter') == 3

    @pytest.mark.parametrize('bad_id', [999999, 'abc', None])
    def test_delete_missing_raises(self, bad_id):
        with pytest.raises(ResourceNotFoundError):
            StockService.delete_stock_in(stock_in_id=bad_id)


class TestStockOut:

    def test_sale_scenario(self, filter_part):
        with pytest.raises(InsufficientStockError) as exc_info:
            StockService.create_stock_out(
                spare_part_name='Filter', quantity=12, unit_price=500, date=DAY,
            )
        assert 'Available quantity: 10' in str(exc_info.value.detail)
        assert _quantity('Filter') == 10
        assert StockOut.objects.count() == 0

        movement = StockService.create_stock_out(
            spare_part_name='Filter', quantity=4, unit_price=500, date=DAY,
        )
        assert movement.total_price == Decimal('2000.00')
        assert _quantity('Filter') == 6

    def test_sell_exactly_available(self, filter_part):
        StockService.create_stock_out(
            spare_part_name='Filter', quantity=10, unit_price=500, date=DAY,
        )
        assert _quantity('Filter') == 0
        with pytest.raises(InsufficientStockError):
            StockService.create_stock_out(
                spare_part_name='Filter', quantity=1, unit_price=500, date=DAY,
            )

    def test_sale_price_is_independent_of_catalog_price(self, filter_part):
        movement = StockService.create_stock_out(
            spare_part_name='Filter', quantity=1, unit_price=Decimal('450.00'), date=DAY,
        )
        PartService.update_part(name='Filter', unit_price=Decimal('700.00'))
        movement.refresh_from_db()
        assert movement.unit_price == Decimal('450.00')

    def test_negative_price_rejected(self, filter_part):
        with pytest.raises(InvalidInputError):
            StockService.create_stock_out(
                spare_part_name='Filter', quantity=1, unit_price=-1, date=DAY,
            )
        assert _quantity('Filter') == 10

    def test_create_for_missing_part_raises(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.create_stock_out(
                spare_part_name='Nope', quantity=1, unit_price=1, date=DAY,
            )

    def test_update_applies_difference_and_replaces_price(self, filter_part):
        movement = StockService.create_stock_out(
            spare_part_name='Filter', quantity=4, unit_price=500, date=DAY,
        )
        StockService.update_stock_out(
            stock_out_id=movement.pk, quantity=7, unit_price=Decimal('480'), date=DAY,
        )
        assert _quantity('Filter') == 3
        movement.refresh_from_db()
        assert movement.unit_price == Decimal('480.00')

        StockService.update_stock_out(
            stock_out_id=movement.pk, quantity=1, unit_price=Decimal('480'), date=DAY,
        )
        assert _quantity('Filter') == 9

    def test_update_refused_beyond_available(self, filter_part):
        movement = StockService.create_stock_out(
            spare_part_name='Filter', quantity=4, unit_price=500, date=DAY,
        )
        with pytest.raises(InvalidOperationError):
            StockService.update_stock_out(
                stock_out_id=movement.pk, quantity=11, unit_price=500, date=DAY,
            )
        movement.refresh_from_db()
        assert movement.quantity == 4
        assert _quantity('Filter') == 6

    def test_delete_returns_quantity(self, filter_part):
        movement = StockService.create_stock_out(
            spare_part_name='Filter', quantity=4, unit_price=500, date=DAY,
        )
        assert StockService.delete_stock_out(stock_out_id=movement.pk) == 10
        assert StockOut.objects.count() == 0

    def test_delete_missing_raises(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.delete_stock_out(stock_out_id=999999)


class TestReconciliation:

    def test_quantity_matches_ledger_after_mixed_operations(self):
        part = PartFactory(name='Belt', quantity=20)
        ins = [
            StockService.create_stock_in(spare_part_name='Belt', quantity=q, date=DAY)
            for q in (5, 3, 12)
        ]
        outs = [
            StockService.create_stock_out(spare_part_name='Belt', quantity=q, unit_price=10, date=DAY)
            for q in (7, 4, 9)
        ]
        StockService.update_stock_in(stock_in_id=ins[0].pk, quantity=9, date=DAY)
        StockService.update_stock_out(stock_out_id=outs[1].pk, quantity=1, unit_price=10, date=DAY)
        StockService.delete_stock_out(stock_out_id=outs[2].pk)
        StockService.delete_stock_in(stock_in_id=ins[1].pk)

        total_in = StockIn.objects.for_part('Belt').aggregate(total=Sum('quantity'))['total']
        total_out = StockOut.objects.for_part('Belt').sales_summary()['total_quantity']
        part.refresh_from_db()
        assert part.quantity == 20 + total_in - total_out == 33

    def test_update_equals_delete_then_recreate(self):
        PartFactory(name='A', quantity=10)
        PartFactory(name='B', quantity=10)
        a = StockService.create_stock_out(spare_part_name='A', quantity=3, unit_price=1, date=DAY)
        b = StockService.create_stock_out(spare_part_name='B', quantity=3, unit_price=1, date=DAY)

        StockService.update_stock_out(stock_out_id=a.pk, quantity=8, unit_price=1, date=DAY)
        StockService.delete_stock_out(stock_out_id=b.pk)
        StockService.create_stock_out(spare_part_name='B', quantity=8, unit_price=1, date=DAY)

        assert _quantity('A') == _quantity('B') == 2

    def test_create_then_delete_restores_quantity(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=7, date=DAY)
        StockService.delete_stock_in(stock_in_id=movement.pk)
        sale = StockService.create_stock_out(
            spare_part_name='Filter', quantity=7, unit_price=500, date=DAY,
        )
        StockService.delete_stock_out(stock_out_id=sale.pk)
        assert _quantity('Filter') == 10

    def test_storage_failure_rolls_back_movement(self, filter_part):
        with patch('stock.services._set_quantity', side_effect=DatabaseError('disk full')):
            with pytest.raises(StorageFailureError):
                StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        assert StockIn.objects.count() == 0
        assert _quantity('Filter') == 10

    def test_storage_failure_on_delete_keeps_movement(self, filter_part):
        movement = StockService.create_stock_out(
            spare_part_name='Filter', quantity=4, unit_price=500, date=DAY,
        )
        with patch('stock.services._set_quantity', side_effect=DatabaseError('disk full')):
            with pytest.raises(StorageFailureError):
                StockService.delete_stock_out(stock_out_id=movement.pk)
        assert StockOut.objects.filter(pk=movement.pk).exists()
        assert _quantity('Filter') == 6


class TestListing:

    def test_list_filters_by_part_and_range(self):
        PartFactory(name='A')
        PartFactory(name='B')
        StockService.create_stock_in(spare_part_name='A', quantity=1, date=date(2025, 1, 1))
        StockService.create_stock_in(spare_part_name='A', quantity=1, date=date(2025, 1, 9))
        StockService.create_stock_in(spare_part_name='B', quantity=1, date=date(2025, 1, 5))

        assert StockService.list_stock_in(spare_part_name='A').count() == 2
        assert StockService.list_stock_in(
            date_from=date(2025, 1, 2), date_to=date(2025, 1, 9),
        ).count() == 2

    def test_list_newest_first(self):
        PartFactory(name='A')
        old = StockService.create_stock_out(
            spare_part_name='A', quantity=1, unit_price=1, date=date(2025, 1, 1),
        )
        new = StockService.create_stock_out(
            spare_part_name='A', quantity=1, unit_price=1, date=date(2025, 1, 2),
        )
        assert list(StockService.list_stock_out()) == [new, old]

    def test_get_missing_raises(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.get_stock_in(stock_in_id=999999)
        with pytest.raises(ResourceNotFoundError):
            StockService.get_stock_out(stock_out_id='x')


class TestPartialUpdates:

    def test_stock_in_date_only_keeps_current_quantity(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        StockService.update_stock_in(stock_in_id=movement.pk, quantity=9)

        StockService.update_stock_in(stock_in_id=movement.pk, date=date(2025, 2, 1))

        movement.refresh_from_db()
        assert (movement.quantity, movement.date) == (9, date(2025, 2, 1))
        assert _quantity('Filter') == 19

    def test_stock_out_date_only_keeps_quantity_and_price(self, filter_part):
        movement = StockService.create_stock_out(
            spare_part_name='Filter', quantity=4, unit_price=Decimal('480.00'), date=DAY,
        )
        StockService.update_stock_out(stock_out_id=movement.pk, date=date(2025, 2, 1))

        movement.refresh_from_db()
        assert (movement.quantity, movement.unit_price) == (4, Decimal('480.00'))
        assert movement.date == date(2025, 2, 1)
        assert _quantity('Filter') == 6

    def test_given_zero_quantity_still_rejected(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        with pytest.raises(InvalidInputError):
            StockService.update_stock_in(stock_in_id=movement.pk, quantity=0)
        assert _quantity('Filter') == 15


class TestLockOrder:

    def _select_order(self, captured, movement_table):
        selects = [q['sql'] for q in captured if q['sql'].startswith('SELECT')]
        part_lock = next(i for i, sql in enumerate(selects) if 'FROM "catalog_part"' in sql)
        movement_lock = next(
            i for i, sql in enumerate(selects)
            if f'FROM "{movement_table}"' in sql and f'"{movement_table}"."quantity"' in sql
        )
        return part_lock, movement_lock

    def test_stock_in_edit_locks_part_before_movement(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        with CaptureQueriesContext(connection) as ctx:
            StockService.update_stock_in(stock_in_id=movement.pk, quantity=6, date=DAY)
        part_lock, movement_lock = self._select_order(ctx.captured_queries, 'stock_stockin')
        assert part_lock < movement_lock

    def test_stock_out_delete_locks_part_before_movement(self, filter_part):
        movement = StockService.create_stock_out(
            spare_part_name='Filter', quantity=4, unit_price=500, date=DAY,
        )
        with CaptureQueriesContext(connection) as ctx:
            StockService.delete_stock_out(stock_out_id=movement.pk)
        part_lock, movement_lock = self._select_order(ctx.captured_queries, 'stock_stockout')
        assert part_lock < movement_lock

    def test_deleted_movement_is_not_found(self, filter_part):
        movement = StockService.create_stock_in(spare_part_name='Filter', quantity=5, date=DAY)
        StockIn.objects.filter(pk=movement.pk).delete()
        with pytest.raises(ResourceNotFoundError):
            StockService.delete_stock_in(stock_in_id=movement.pk)
        assert _quantity('Filter') == 15
