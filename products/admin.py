"""
Products — Django Admin Configuration

Registration fields are editable; quantity, version and active state
are read-only (they change only through the stock service and the
deactivation guard). Deleting from the admin is disabled.

@file products/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'quantity', 'is_active', 'version', 'updated_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'description')
    readonly_fields = (
        'id', 'quantity', 'is_active', 'version',
        'created_by', 'created_at', 'updated_at', 'deactivated_at',
    )
    ordering = ('name',)
    list_per_page = 50

    fieldsets = (
        (_('Product'), {
            'fields': ('id', 'name', 'description'),
        }),
        (_('Stock'), {
            'fields': ('quantity', 'version', 'is_active', 'deactivated_at'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'created_at', 'updated_at'),
        }),
    )

    def has_delete_permission(self, request, obj=None):
        return False
