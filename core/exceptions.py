"""
Core — Exception Handling

Custom exceptions and DRF exception handler for consistent API
error envelopes.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('stockroom')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Raised when a business rule is violated at the service layer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class InvalidQuantity(BusinessRuleViolation):
    """Raised before any record is touched when a mutation quantity is not a positive integer."""
    default_detail = 'Quantity must be a positive integer.'
    default_code = 'INVALID_QUANTITY'


class InsufficientStockError(APIException):
    """Raised at the API edge when a removal exceeds the quantity on hand."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Insufficient stock for this operation.'
    default_code = 'INSUFFICIENT_STOCK'

    def __init__(self, *, product_id, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__()
        # Plain dict keeps the integers intact in the error envelope.
        self.detail = {
            'detail': (
                f'Insufficient stock for product {product_id}. '
                f'Requested: {requested}, Available: {available}.'
            ),
            'product_id': str(product_id),
            'requested': requested,
            'available': available,
        }


class ProductHasStockError(APIException):
    """Raised at the API edge when deactivation is attempted on a product with stock."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Cannot deactivate a product with stock on hand.'
    default_code = 'PRODUCT_HAS_STOCK'

    def __init__(self, *, product_id, current_quantity: int):
        self.product_id = product_id
        self.current_quantity = current_quantity
        super().__init__()
        self.detail = {
            'detail': (
                f'Cannot delete product {product_id}: it has {current_quantity} '
                f'units in stock. Remove all stock before deleting.'
            ),
            'product_id': str(product_id),
            'current_quantity': current_quantity,
        }


class StockLockTimeout(APIException):
    """Raised when the product row lock could not be acquired in time. Safe to retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'The product is busy with another stock operation. Try again.'
    default_code = 'STOCK_LOCK_TIMEOUT'


class DuplicateResourceError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'DUPLICATE_RESOURCE'


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "errors": {...}, "code": "ERROR_CODE" }
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = APIException(detail='Permission denied.', code='PERMISSION_DENIED')
        exc.status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, ValidationError):
        data = {
            'success': False,
            'errors': exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages},
            'code': 'VALIDATION_ERROR',
        }
        return Response(data, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)

    if response is not None:
        errors = {}
        code = getattr(exc, 'default_code', 'ERROR')

        if isinstance(response.data, dict):
            errors = response.data
            code = response.data.pop('code', code) if 'code' in response.data else code
        elif isinstance(response.data, list):
            errors = {'detail': response.data}
        else:
            errors = {'detail': [str(response.data)]}

        response.data = {
            'success': False,
            'errors': errors,
            'code': code,
        }

    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            {'success': False, 'errors': {'detail': ['Internal server error.']}, 'code': 'INTERNAL_ERROR'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
