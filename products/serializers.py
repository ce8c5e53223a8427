"""
Products — Serializers

Read and write serializers for Product, plus the stock-status query
and response shapes.

@file products/serializers.py
"""

from django.conf import settings
from rest_framework import serializers

from stock.classification import StockStatus

from .models import Product


class ProductReadSerializer(serializers.ModelSerializer):
    stock_status = serializers.SerializerMethodField()
    is_low_stock = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description',
            'quantity', 'is_active', 'version',
            'stock_status', 'is_low_stock',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_stock_status(self, obj):
        return obj.stock_status(settings.LOW_STOCK_THRESHOLD)

    def get_is_low_stock(self, obj):
        return obj.is_low_stock(settings.LOW_STOCK_THRESHOLD)


class ProductWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ['name', 'description']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Product name is required.')
        return value


class ThresholdQuerySerializer(serializers.Serializer):
    threshold = serializers.IntegerField(min_value=0, required=False)


class StockStatusSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField()
    threshold = serializers.IntegerField()
    status = serializers.ChoiceField(choices=StockStatus.choices)
