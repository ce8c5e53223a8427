"""
Products — Views

Product registration, listing, deactivation (DELETE), low-stock listing
and per-product stock classification.

@file products/views.py
"""

from django.conf import settings
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from stock.services import StockService

from .models import Product
from .permissions import CanManageProducts
from .serializers import (
    ProductReadSerializer,
    ProductWriteSerializer,
    StockStatusSerializer,
    ThresholdQuerySerializer,
)
from .services import ProductService


class ProductViewSet(viewsets.ModelViewSet):
    """
    Active products.

    There is no update endpoint: quantity moves only through /stock/,
    and DELETE is a guarded soft delete that fails while stock remains.
    """

    permission_classes = [IsAuthenticated, CanManageProducts]
    http_method_names = ['get', 'post', 'delete', 'head', 'options']
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'quantity', 'created_at', 'updated_at']
    ordering = ['name']

    def get_queryset(self):
        return Product.objects.filter(is_active=True)

    def get_serializer_class(self):
        if self.action == 'create':
            return ProductWriteSerializer
        return ProductReadSerializer

    def create(self, request, *args, **kwargs):
        ser = ProductWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product = ProductService.create_product(actor=request.user, **ser.validated_data)
        return Response(
            ProductReadSerializer(product).data,
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request, *args, **kwargs):
        # No get_object(): the guard must read quantity under its own lock.
        outcome = ProductService.deactivate_product(
            product_id=kwargs['pk'], actor=request.user,
        )
        if not outcome.ok:
            raise outcome.as_error()
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _threshold(self, request) -> int:
        ser = ThresholdQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        return ser.validated_data.get('threshold', settings.LOW_STOCK_THRESHOLD)

    @action(detail=False, methods=['get'], url_path='low-stock')
    def low_stock(self, request):
        products = ProductService.get_low_stock(threshold=self._threshold(request))
        ser = ProductReadSerializer(products, many=True)
        return Response({'success': True, 'data': ser.data})

    @action(detail=True, methods=['get'], url_path='stock-status')
    def stock_status(self, request, pk=None):
        classification = StockService.classify_product(pk, threshold=self._threshold(request))
        return Response(StockStatusSerializer(classification).data)
