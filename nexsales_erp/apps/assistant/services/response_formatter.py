from decimal import Decimal, ROUND_HALF_UP

from apps.inventory.errors import NotFound
from apps.inventory.serializers import (
    CustomerHistorySerializer,
    DailyReportSerializer,
    ProductSerializer,
)
from .actions import (
    CreateOrder,
    GenerateReport,
    LookupCustomerHistory,
    LookupProduct,
    PlainText,
    UpdateStock,
)

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'INR': '₹',
    'JPY': '¥',
}

GENERIC_FAILURE = "Sorry, I encountered an error processing your request."


def format_money(amount, currency):
    """``$1,234.50`` for known currencies, ``1,234.50 CHF`` otherwise."""
    value = Decimal(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol:
        return "{}{:,.2f}".format(symbol, value)
    return "{:,.2f} {}".format(value, currency)


class AssistantResponse:
    def __init__(self, text, action, success=True, data=None):
        self.text = text
        self.action = action
        self.success = success
        self.data = data

    def as_dict(self):
        return {
            'response': self.text,
            'action': self.action,
            'success': self.success,
            'data': self.data,
        }


class ResponseFormatter:
    """Renders an executed action as chat text plus an optional display payload."""

    def __init__(self, config):
        self.config = config
        self._success = {
            PlainText: self._plain_text,
            CreateOrder: self._order_created,
            LookupProduct: self._product_card,
            UpdateStock: self._stock_updated,
            LookupCustomerHistory: self._customer_history,
            GenerateReport: self._daily_report,
        }

    def money(self, amount):
        return format_money(amount, self.config.currency)

    def format(self, action, result):
        if not result.success:
            return AssistantResponse(
                text=self._failure_text(action, result.error),
                action=action.kind,
                success=False,
            )
        text, data = self._success[type(action)](action, result.value)
        return AssistantResponse(text=text, action=action.kind, data=data)

    # ── Success ──────────────────────────────────────────────────────────

    def _plain_text(self, action, message):
        return message, None

    def _order_created(self, action, order):
        lines = ["✅ Success! {}".format(action.confirmation_message).rstrip()]
        lines.append("Order {} · Total: {}".format(order.order_id, self.money(order.total)))
        return "\n".join(lines), None

    def _product_card(self, action, product):
        return (
            "Here is the current stock information for {}:".format(product.name),
            {'type': 'product_card', 'product': ProductSerializer(product).data},
        )

    def _stock_updated(self, action, change):
        verb, preposition = ('Added', 'to') if change.quantity >= 0 else ('Removed', 'from')
        text = "✅ Inventory Updated.\n{} {} units {} {}.\nNew Stock Level: {}".format(
            verb, abs(change.quantity), preposition, change.after.name, change.after.stock,
        )
        return text, None

    def _customer_history(self, action, history):
        return (
            "Found {} orders for {}.".format(len(history.orders), history.customer.name),
            {'type': 'customer_history', **CustomerHistorySerializer(history).data},
        )

    def _daily_report(self, action, report):
        return (
            "Generated End of Day Report for {}.".format(report.date.strftime('%a %b %d %Y')),
            {'type': 'daily_report', 'report': DailyReportSerializer(report).data},
        )

    # ── Failure ──────────────────────────────────────────────────────────

    def _failure_text(self, action, error):
        if not isinstance(error, NotFound):
            return GENERIC_FAILURE

        if isinstance(action, CreateOrder):
            return (
                "I understood the order, but failed to create it: "
                "{} '{}' was not found.".format(error.kind, error.record_id)
            )
        if isinstance(action, LookupProduct):
            return (
                "I found a match, but the product ID '{}' seems invalid "
                "in the current database.".format(error.record_id)
            )
        if isinstance(action, UpdateStock):
            return "Could not update stock: Product '{}' not found.".format(error.record_id)
        if isinstance(action, LookupCustomerHistory):
            return "I couldn't find that customer in the database."
        return GENERIC_FAILURE
