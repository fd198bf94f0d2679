"""
Catalog — Django Admin Configuration

Spare part admin with stock level colour coding. Quantity is read-only
on existing parts; movements adjust it through StockService.

@file catalog/admin.py
"""

from django.conf import settings
from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import Part


@admin.register(Part)
class PartAdmin(admin.ModelAdmin):
    list_display = (
        'name', 'category', 'quantity', 'unit_price',
        'formatted_total_value', 'stock_badge', 'updated_at',
    )
    list_filter = ('category',)
    search_fields = ('name', 'category')
    show_full_result_count = False
    list_per_page = 50
    ordering = ('name',)

    fieldsets = (
        (_('Part'), {
            'fields': ('name', 'category'),
        }),
        (_('Stock'), {
            'fields': ('quantity', 'unit_price'),
        }),
        (_('Timestamps'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ('created_at', 'updated_at')
        return ('name', 'quantity', 'created_at', 'updated_at')

    @admin.display(description=_('Total value'))
    def formatted_total_value(self, obj):
        return f'{obj.total_value:,.2f}'

    @admin.display(description=_('Stock'))
    def stock_badge(self, obj):
        if obj.quantity < settings.LOW_STOCK_THRESHOLD:
            color, label = '#ef4444', _('Low')
        elif obj.quantity < settings.MEDIUM_STOCK_THRESHOLD:
            color, label = '#eab308', _('Medium')
        else:
            color, label = '#22c55e', _('OK')
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, label,
        )
