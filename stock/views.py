"""
Stock — Views

POST /stock/add/, POST /stock/remove/, GET /stock/history/ and
GET /stock/history/{product_id}/.

@file stock/views.py
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import (
    HistoryQuerySerializer,
    StockMovementReadSerializer,
    StockMutationResultSerializer,
    StockMutationSerializer,
)
from .services import StockService


class StockViewSet(viewsets.ViewSet):
    """Stock mutations and ledger queries. Any authenticated user may move stock."""

    permission_classes = [IsAuthenticated]

    def _mutate(self, request, operation):
        ser = StockMutationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        outcome = operation(actor=request.user, **ser.validated_data)
        if not outcome.ok:
            raise outcome.as_error()
        return Response(StockMutationResultSerializer(outcome).data)

    @action(detail=False, methods=['post'], url_path='add')
    def add(self, request):
        return self._mutate(request, StockService.add_stock)

    @action(detail=False, methods=['post'], url_path='remove')
    def remove(self, request):
        return self._mutate(request, StockService.remove_stock)

    def _history(self, request, product_id=None):
        ser = HistoryQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        params = ser.validated_data
        movements = StockService.get_history(
            product_id=product_id or params.get('product_id'),
            from_time=params.get('from_date'),
            to_time=params.get('to_date'),
            limit=params.get('limit'),
        )
        return Response(StockMovementReadSerializer(movements, many=True).data)

    @action(detail=False, methods=['get'], url_path='history')
    def history(self, request):
        return self._history(request)

    @action(
        detail=False, methods=['get'],
        url_path=r'history/(?P<product_id>[0-9a-fA-F-]{36})',
        url_name='product-history',
    )
    def product_history(self, request, product_id=None):
        return self._history(request, product_id=product_id)
