"""
Stock — Django Admin Configuration

Read-only list of StockMovement. No add, no edit, no delete (insert-only;
entries are written by StockService alone).

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import StockMovement


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = (
        'occurred_at', 'product', 'sequence', 'change_type',
        'delta', 'quantity_after', 'actor', 'reason',
    )
    list_filter = ('change_type', 'occurred_at')
    search_fields = ('product__name', 'reason')
    readonly_fields = (
        'id', 'product', 'sequence', 'delta', 'quantity_after',
        'change_type', 'reason', 'actor', 'occurred_at',
    )
    list_select_related = ('product', 'actor')
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'occurred_at'
    ordering = ('-occurred_at', '-sequence')

    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'product', 'sequence', 'change_type', 'delta', 'quantity_after'),
        }),
        (_('Context'), {
            'fields': ('reason', 'actor', 'occurred_at'),
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False  # insert-only

    def has_delete_permission(self, request, obj=None):
        return False  # insert-only
