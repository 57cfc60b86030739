import logging

from rest_framework.response import Response
from rest_framework.views import APIView

from apps.inventory.errors import DuplicateRecord
from apps.inventory.serializers import CustomerSerializer, ProductSerializer
from apps.inventory.store import get_store
from .errors import UpstreamUnavailable
from .services.agent import AssistantAgent
from .services.mock_data import MockDataGenerator

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────
#  Chat endpoint
# ─────────────────────────────────────────
class AssistantMessageView(APIView):

    def post(self, request):
        message = request.data.get('message', '')
        if not isinstance(message, str) or not message.strip():
            return Response({'error': 'message is required'}, status=400)

        message = message.strip()
        logger.info("REQUEST  — message: %s", message)

        agent = AssistantAgent(store=get_store())
        result = agent.run(message)
        logger.info("RESPONSE — action: %s | success: %s", result.action, result.success)

        return Response(result.as_dict())


# ─────────────────────────────────────────
#  Mock data
# ─────────────────────────────────────────
class MockDataView(APIView):

    def post(self, request):
        store = get_store()
        if store.products():
            return Response({'error': 'Mock data can only be loaded into an empty product list'}, status=409)

        try:
            products, customers = MockDataGenerator(store).load()
        except UpstreamUnavailable as e:
            logger.error("MOCK DATA — %s", e.reason)
            return Response({'error': 'Failed to generate data. Please check the API key.'}, status=503)
        except DuplicateRecord as e:
            return Response({'error': str(e)}, status=409)

        return Response({
            'response': "Successfully added {} products and {} customers to the database.".format(
                len(products), len(customers),
            ),
            'products': ProductSerializer(products, many=True).data,
            'customers': CustomerSerializer(customers, many=True).data,
        }, status=201)
