"""
Stock — Serializers

Input shapes for add/remove and history queries; read shape for ledger
entries.

@file stock/serializers.py
"""

from rest_framework import serializers

from core.constants import MAX_REASON_LENGTH, MAX_STOCK_QUANTITY

from .models import StockMovement


class StockMutationSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_STOCK_QUANTITY)
    reason = serializers.CharField(
        max_length=MAX_REASON_LENGTH, required=False, allow_blank=True, default='',
    )


class StockMutationResultSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    new_quantity = serializers.IntegerField()


class HistoryQuerySerializer(serializers.Serializer):
    product_id = serializers.UUIDField(required=False)
    from_date = serializers.DateTimeField(required=False)
    to_date = serializers.DateTimeField(required=False)
    # Values above STOCK_HISTORY_MAX_LIMIT are capped by the service, not rejected.
    limit = serializers.IntegerField(min_value=1, required=False)

    def validate(self, attrs):
        start = attrs.get('from_date')
        end = attrs.get('to_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'to_date': 'to_date must not be earlier than from_date.',
            })
        return attrs


class StockMovementReadSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    actor_name = serializers.SerializerMethodField()
    change_type_display = serializers.CharField(
        source='get_change_type_display', read_only=True,
    )

    class Meta:
        model = StockMovement
        fields = [
            'id', 'product', 'product_name', 'sequence',
            'delta', 'quantity_after',
            'change_type', 'change_type_display', 'reason',
            'actor', 'actor_name', 'occurred_at',
        ]
        read_only_fields = fields

    def get_actor_name(self, obj):
        if obj.actor is None:
            return None
        return obj.actor.get_full_name() or obj.actor.get_username()
