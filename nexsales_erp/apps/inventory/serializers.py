import uuid
from decimal import ROUND_HALF_UP

from rest_framework import serializers

from .orders import OrderLine
from .records import Customer, OrderStatus, Product


def new_id():
    return str(uuid.uuid4())


class ProductSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=100)
    sku = serializers.CharField(max_length=100)
    name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=100, allow_blank=True, default='')
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False)
    stock = serializers.IntegerField()
    reorder_level = serializers.IntegerField(default=10)
    is_low_stock = serializers.BooleanField(read_only=True)

    def create(self, validated_data):
        validated_data.setdefault('id', new_id())
        return Product(**validated_data)


class CustomerSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, max_length=100)
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(allow_blank=True, default='')
    phone = serializers.CharField(max_length=50, allow_blank=True, default='')
    company = serializers.CharField(max_length=255, allow_blank=True, default='')

    def create(self, validated_data):
        validated_data.setdefault('id', new_id())
        return Customer(**validated_data)


class OrderItemSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()
    quantity = serializers.IntegerField()
    price_at_time = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)


class OrderSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    customer_id = serializers.CharField()
    customer_name = serializers.CharField()
    date = serializers.DateTimeField()
    items = OrderItemSerializer(many=True)
    subtotal = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)
    # Stored unrounded; rendered to cents.
    total = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)
    status = serializers.CharField()


class OrderLineSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        return OrderLine(values['product_id'], values['quantity'])


class OrderCreateSerializer(serializers.Serializer):
    customer_id = serializers.CharField()
    items = OrderLineSerializer(many=True, allow_empty=False)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class CustomerHistorySerializer(serializers.Serializer):
    customer = CustomerSerializer()
    orders = OrderSerializer(many=True)
    total_spent = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)


class DailyReportSerializer(serializers.Serializer):
    period = serializers.CharField()
    date = serializers.DateField()
    orders_count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)
    low_stock_items = ProductSerializer(many=True)
    pending_orders_count = serializers.IntegerField()
    pending_orders_total = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)


class BestSellerSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    name = serializers.CharField()
    quantity = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)


class TopCustomerSerializer(serializers.Serializer):
    customer_id = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    company = serializers.CharField(allow_null=True)
    total_spent = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)


class RestockRecommendationSerializer(serializers.Serializer):
    product = ProductSerializer()
    suggested_order = serializers.IntegerField()
    estimated_cost = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)


class InventoryReportSerializer(serializers.Serializer):
    total_inventory_value = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)
    low_stock_items = ProductSerializer(many=True)
    todays_sales_total = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)
    confirmed_revenue = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, coerce_to_string=False)
    best_sellers = BestSellerSerializer(many=True)
    top_customer = TopCustomerSerializer(allow_null=True)
    restock_recommendations = RestockRecommendationSerializer(many=True)
