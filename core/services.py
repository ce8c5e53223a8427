"""
Core — Audit Service

Writes AuditLog rows for product lifecycle events. Called inside the
caller's transaction, so an audit row commits or rolls back with the
change it describes.

@file core/services.py
"""

import logging
from typing import Any

from core.models import AuditLog

logger = logging.getLogger('stockroom')

# Fields captured for Product lifecycle entries. quantity, is_active and
# version are not editable, so model_to_dict would skip them.
PRODUCT_AUDIT_FIELDS = ('name', 'description', 'quantity', 'is_active', 'version')


def _json_value(value):
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return str(value)


class AuditService:
    """Centralised audit logging for product lifecycle operations."""

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        model_name: str,
        object_id: str,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditLog:
        if actor is not None and not getattr(actor, 'is_authenticated', False):
            actor = None
        entry = AuditLog.objects.create(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
        )
        logger.debug('Audit %s %s:%s by %s', action, model_name, object_id, actor)
        return entry

    @staticmethod
    def snapshot(instance, fields=PRODUCT_AUDIT_FIELDS) -> dict[str, Any]:
        """
        Read the named attributes off an instance into a JSON-ready dict.
        Datetimes are ISO-formatted; UUIDs and other objects stringified.
        """
        return {name: _json_value(getattr(instance, name)) for name in fields}
