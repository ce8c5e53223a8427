"""
Core — Exception handler and renderer tests.

@file core/tests/test_exceptions.py
"""

import json
import uuid

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response

from core.exceptions import (
    InsufficientStockError,
    ProductHasStockError,
    StockLockTimeout,
    standard_exception_handler,
)
from core.renderers import StandardJSONRenderer


class TestStandardExceptionHandler:

    def test_http404_becomes_not_found_envelope(self):
        response = standard_exception_handler(Http404(), {})
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['success'] is False
        assert response.data['code'] == 'RESOURCE_NOT_FOUND'

    def test_validation_error_envelope(self):
        response = standard_exception_handler(DRFValidationError({'quantity': ['bad']}), {})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert 'quantity' in response.data['errors']

    def test_insufficient_stock_keeps_integers(self):
        product_id = uuid.uuid4()
        exc = InsufficientStockError(product_id=product_id, requested=5, available=2)
        response = standard_exception_handler(exc, {})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'INSUFFICIENT_STOCK'
        errors = response.data['errors']
        assert errors['product_id'] == str(product_id)
        assert errors['requested'] == 5
        assert errors['available'] == 2

    def test_product_has_stock_message(self):
        product_id = uuid.uuid4()
        exc = ProductHasStockError(product_id=product_id, current_quantity=7)
        response = standard_exception_handler(exc, {})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'PRODUCT_HAS_STOCK'
        assert response.data['errors']['current_quantity'] == 7
        assert '7 units in stock' in response.data['errors']['detail']

    def test_lock_timeout_is_service_unavailable(self):
        response = standard_exception_handler(StockLockTimeout(), {})
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['code'] == 'STOCK_LOCK_TIMEOUT'

    def test_unhandled_exception_is_internal_error(self):
        response = standard_exception_handler(RuntimeError('boom'), {})
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['code'] == 'INTERNAL_ERROR'


class TestStandardJSONRenderer:

    def _render(self, data, status_code=200):
        response = Response(data, status=status_code)
        body = StandardJSONRenderer().render(data, renderer_context={'response': response})
        return json.loads(body) if body else None

    def test_wraps_plain_payload(self):
        assert self._render({'new_quantity': 3}) == {
            'success': True,
            'data': {'new_quantity': 3},
        }

    def test_paginated_payload_gets_meta(self):
        rendered = self._render({'count': 1, 'next': None, 'previous': None, 'results': [1]})
        assert rendered['data'] == [1]
        assert rendered['meta']['count'] == 1

    def test_error_payload_passes_through(self):
        rendered = self._render({'success': False, 'code': 'X'}, status_code=409)
        assert rendered == {'success': False, 'code': 'X'}

    def test_empty_body_stays_empty(self):
        assert self._render(None, status_code=204) is None
