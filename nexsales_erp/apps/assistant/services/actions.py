"""Commands the assistant can ask the system to carry out."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PlainText:
    kind = 'plain_text'

    message: str


@dataclass(frozen=True)
class CreateOrder:
    kind = 'create_order'

    customer_id: str
    # OrderLine tuples, in the order the assistant listed them.
    items: tuple
    confirmation_message: str = ''


@dataclass(frozen=True)
class LookupProduct:
    kind = 'lookup_product'

    product_id: str


@dataclass(frozen=True)
class UpdateStock:
    kind = 'update_stock'

    product_id: str
    quantity: int


@dataclass(frozen=True)
class LookupCustomerHistory:
    kind = 'lookup_customer_history'

    customer_id: str


@dataclass(frozen=True)
class GenerateReport:
    kind = 'generate_report'

    period: str = field(default='today')


ACTION_TYPES = (CreateOrder, LookupProduct, UpdateStock, LookupCustomerHistory, GenerateReport)
