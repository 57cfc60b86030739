import json
import logging
import re

from rest_framework import serializers

from apps.inventory.serializers import OrderLineSerializer
from ..errors import ParseFailure
from .actions import (
    CreateOrder,
    GenerateReport,
    LookupCustomerHistory,
    LookupProduct,
    PlainText,
    UpdateStock,
)

logger = logging.getLogger(__name__)


class AssistantOrderLineSerializer(OrderLineSerializer):
    """Order line as the assistant spells it (camelCase keys)."""

    product_id = None
    productId = serializers.CharField(source='product_id')


class CreateOrderSerializer(serializers.Serializer):
    customerId = serializers.CharField()
    items = AssistantOrderLineSerializer(many=True, allow_empty=False)
    confirmationMessage = serializers.CharField(allow_blank=True, default='')

    def build(self, data):
        return CreateOrder(
            customer_id=data['customerId'],
            items=tuple(data['items']),
            confirmation_message=data['confirmationMessage'],
        )


class LookupProductSerializer(serializers.Serializer):
    productId = serializers.CharField()

    def build(self, data):
        return LookupProduct(product_id=data['productId'])


class UpdateStockSerializer(serializers.Serializer):
    productId = serializers.CharField()
    quantity = serializers.IntegerField()

    def build(self, data):
        return UpdateStock(product_id=data['productId'], quantity=data['quantity'])


class LookupCustomerHistorySerializer(serializers.Serializer):
    customerId = serializers.CharField()

    def build(self, data):
        return LookupCustomerHistory(customer_id=data['customerId'])


class GenerateReportSerializer(serializers.Serializer):
    period = serializers.CharField(default='today', allow_null=True)

    def build(self, data):
        return GenerateReport(period=data['period'] or 'today')


ACTION_SCHEMAS = {
    CreateOrder.kind: CreateOrderSerializer,
    LookupProduct.kind: LookupProductSerializer,
    UpdateStock.kind: UpdateStockSerializer,
    LookupCustomerHistory.kind: LookupCustomerHistorySerializer,
    GenerateReport.kind: GenerateReportSerializer,
}


class CommandParser:
    """
    Turns a raw assistant reply into an action. Anything that is not a
    well-formed action object (prose, broken JSON, an unknown tag, missing
    fields) comes back as ``PlainText`` with the reply untouched.
    """

    def parse(self, raw):
        if raw is None:
            return PlainText('')
        try:
            return self._decode(raw)
        except ParseFailure as e:
            logger.warning("PARSE FAILED — %s", e.reason)
            return PlainText(raw)

    def _decode(self, raw):
        cleaned = self.clean(raw)
        if not cleaned.startswith('{'):
            return PlainText(raw)

        try:
            payload = json.loads(cleaned)
        except (ValueError, RecursionError) as e:
            raise ParseFailure("malformed JSON ({})".format(e))

        if not isinstance(payload, dict):
            raise ParseFailure("expected a JSON object")

        tag = payload.get('action')
        schema = ACTION_SCHEMAS.get(tag) if isinstance(tag, str) else None
        if schema is None:
            raise ParseFailure("unknown action {!r}".format(tag))

        serializer = schema(data=payload)
        if not serializer.is_valid():
            raise ParseFailure("{} rejected: {}".format(tag, json.dumps(serializer.errors)))
        return serializer.build(serializer.validated_data)

    @staticmethod
    def clean(raw):
        cleaned = raw.strip()

        # Strip markdown code fences if the assistant wrapped the payload
        cleaned = re.sub(r'^```\w*\n?', '', cleaned)
        cleaned = re.sub(r'\n?```$', '', cleaned)
        return cleaned.strip()
