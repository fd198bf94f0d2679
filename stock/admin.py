"""
Stock — Django Admin Configuration

Read-only views of the stock-in and stock-out ledgers. Adding, editing
or deleting a movement must go through StockService so the part's
quantity stays reconciled; the admin does not offer it.

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import StockIn, StockOut


class ReadOnlyLedgerAdmin(admin.ModelAdmin):
    list_filter = ('date',)
    search_fields = ('spare_part__name', 'spare_part__category')
    list_select_related = ('spare_part',)
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'date'
    ordering = ('-date', '-created_at')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(StockIn)
class StockInAdmin(ReadOnlyLedgerAdmin):
    list_display = ('id', 'spare_part', 'quantity', 'date', 'created_at')
    readonly_fields = ('id', 'spare_part', 'quantity', 'date', 'created_at')
    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'spare_part', 'quantity', 'date', 'created_at'),
        }),
    )


@admin.register(StockOut)
class StockOutAdmin(ReadOnlyLedgerAdmin):
    list_display = (
        'id', 'spare_part', 'quantity', 'unit_price',
        'formatted_total_price', 'date', 'created_at',
    )
    readonly_fields = (
        'id', 'spare_part', 'quantity', 'unit_price',
        'formatted_total_price', 'date', 'created_at',
    )
    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'spare_part', 'quantity', 'date', 'created_at'),
        }),
        (_('Sale'), {
            'fields': ('unit_price', 'formatted_total_price'),
        }),
    )

    @admin.display(description=_('Total price'))
    def formatted_total_price(self, obj):
        return f'{obj.total_price:,.2f}'
