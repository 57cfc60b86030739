import logging

from rest_framework.response import Response
from rest_framework.views import APIView

from .errors import DuplicateRecord, InvalidUpdate, NotFound
from .orders import create_order, merge_lines
from .records import OrderStatus
from .reports import inventory_report, restock_low_stock
from .serializers import (
    CustomerSerializer,
    InventoryReportSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    ProductSerializer,
)
from .store import get_store

logger = logging.getLogger(__name__)


def not_found(exc):
    return Response({'error': str(exc)}, status=404)


# ─────────────────────────────────────────
#  Products
# ─────────────────────────────────────────
class ProductListView(APIView):

    def get(self, request):
        return Response(ProductSerializer(get_store().products(), many=True).data)

    def post(self, request):
        serializer = ProductSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        try:
            product = get_store().add_product(serializer.save())
        except DuplicateRecord as e:
            return Response({'error': str(e)}, status=409)
        logger.info("PRODUCT  — created %s (%s)", product.id, product.sku)
        return Response(ProductSerializer(product).data, status=201)


class ProductDetailView(APIView):

    def get(self, request, product_id):
        try:
            product = get_store().get_product(product_id)
        except NotFound as e:
            return not_found(e)
        return Response(ProductSerializer(product).data)

    def patch(self, request, product_id):
        serializer = ProductSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        changes = dict(serializer.validated_data)
        if changes.pop('id', product_id) != product_id:
            return Response({'error': 'Product id cannot be changed'}, status=400)
        try:
            product = get_store().update_product(product_id, **changes)
        except NotFound as e:
            return not_found(e)
        except InvalidUpdate as e:
            return Response({'error': str(e)}, status=400)
        return Response(ProductSerializer(product).data)

    def delete(self, request, product_id):
        try:
            get_store().remove_product(product_id)
        except NotFound as e:
            return not_found(e)
        logger.info("PRODUCT  — deleted %s", product_id)
        return Response(status=204)


# ─────────────────────────────────────────
#  Customers
# ─────────────────────────────────────────
class CustomerListView(APIView):

    def get(self, request):
        return Response(CustomerSerializer(get_store().customers(), many=True).data)

    def post(self, request):
        serializer = CustomerSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        try:
            customer = get_store().add_customer(serializer.save())
        except DuplicateRecord as e:
            return Response({'error': str(e)}, status=409)
        logger.info("CUSTOMER — created %s", customer.id)
        return Response(CustomerSerializer(customer).data, status=201)


class CustomerDetailView(APIView):

    def delete(self, request, customer_id):
        try:
            get_store().remove_customer(customer_id)
        except NotFound as e:
            return not_found(e)
        logger.info("CUSTOMER — deleted %s", customer_id)
        return Response(status=204)


# ─────────────────────────────────────────
#  Orders
# ─────────────────────────────────────────
class OrderListView(APIView):

    def get(self, request):
        return Response(OrderSerializer(get_store().orders(), many=True).data)

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        data = serializer.validated_data
        try:
            order = create_order(
                get_store(),
                customer_id=data['customer_id'],
                lines=merge_lines(data['items']),
                status=OrderStatus.PENDING,
            )
        except NotFound as e:
            return not_found(e)
        return Response(OrderSerializer(order).data, status=201)


class OrderStatusView(APIView):

    def patch(self, request, order_id):
        serializer = OrderStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        try:
            order = get_store().set_order_status(order_id, serializer.validated_data['status'])
        except NotFound as e:
            return not_found(e)
        except InvalidUpdate as e:
            return Response({'error': str(e)}, status=400)
        return Response(OrderSerializer(order).data)


# ─────────────────────────────────────────
#  Reports
# ─────────────────────────────────────────
class ReportView(APIView):

    def get(self, request):
        return Response(InventoryReportSerializer(inventory_report(get_store())).data)


class RestockView(APIView):

    def post(self, request):
        updated = restock_low_stock(get_store())
        return Response({'restocked': ProductSerializer(updated, many=True).data})
