"""Sale entity and payment method value object."""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from inventory_pos.common.utils.date_utils import utc_now
from inventory_pos.common.utils.money_utils import is_whole_number, to_money


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    TRANSFER = "transfer"
    NO_PAYMENT = "no-payment"


@dataclass
class Sale:
    """
    A recorded transaction against one article.

    article_name and unit_price are copied from the article when the sale is
    written and are not refreshed if the article changes later.
    """

    article_id: str
    article_name: str
    unit_price: Decimal
    quantity: int
    total_price: Decimal
    buyer_name: str
    payment_method: PaymentMethod
    amount_paid: Decimal = Decimal("0")
    bank_name: Optional[str] = None
    sale_date: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        self.payment_method = PaymentMethod(self.payment_method)
        if not is_whole_number(self.quantity):
            raise ValueError(f"Quantity must be a whole number, got {self.quantity!r}.")
        if self.quantity <= 0:
            raise ValueError("Quantity must be positive.")
        self.unit_price = to_money(self.unit_price)
        self.total_price = to_money(self.total_price)
        self.amount_paid = to_money(self.amount_paid)

    @property
    def outstanding_balance(self) -> Decimal:
        return self.total_price - self.amount_paid
