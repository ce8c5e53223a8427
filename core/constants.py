"""
Core — Constants

Shared values for audit actions, pagination and stock defaults.

@file core/constants.py
"""

# ---------------------------------------------------------------------------
# Audit actions (mirror AuditLog.ActionChoices)
# ---------------------------------------------------------------------------

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_SOFT_DELETE = 'SOFT_DELETE'

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# ---------------------------------------------------------------------------
# Stock
# ---------------------------------------------------------------------------

DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 500
MAX_REASON_LENGTH = 500
# Largest on-hand quantity a product row can hold (PositiveIntegerField
# on PostgreSQL is a 4-byte integer).
MAX_STOCK_QUANTITY = 2_147_483_647
