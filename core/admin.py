"""
Core — Django Admin Configuration

Read-only viewer for product lifecycle audit entries.

@file core/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.models import AuditLog

ACTION_COLORS = {
    AuditLog.ActionChoices.CREATE: '#16a34a',
    AuditLog.ActionChoices.SOFT_DELETE: '#dc2626',
}


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'action_badge', 'model_name', 'object_id', 'changed_fields', 'actor')
    list_filter = ('action', 'model_name')
    search_fields = ('object_id', 'actor__username')
    readonly_fields = [f.name for f in AuditLog._meta.fields]
    date_hierarchy = 'timestamp'
    list_select_related = ('actor',)
    list_per_page = 50

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Action'))
    def action_badge(self, obj):
        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            ACTION_COLORS.get(obj.action, '#6b7280'), obj.get_action_display(),
        )

    @admin.display(description=_('Changed'))
    def changed_fields(self, obj):
        old = obj.old_values or {}
        new = obj.new_values or {}
        changed = sorted(k for k in set(old) | set(new) if old.get(k) != new.get(k))
        return ', '.join(changed) or '-'
