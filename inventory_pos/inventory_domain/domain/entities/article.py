"""Article entity."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from inventory_pos.common.utils.date_utils import utc_now
from inventory_pos.common.utils.money_utils import is_whole_number, to_money


@dataclass
class Article:
    """A sellable inventory item with a unit price and a stock count."""

    name: str
    price: Decimal
    stock: int
    image_url: str = ""
    initial_stock: int | None = None
    initial_price: Decimal | None = None
    created_at: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        """Post-initialization for validation."""
        if not is_whole_number(self.stock):
            raise ValueError(f"Stock must be a whole number, got {self.stock!r}.")
        if self.stock < 0:
            raise ValueError("Stock cannot be negative.")
        self.price = to_money(self.price)
        if self.price < 0:
            raise ValueError("Price cannot be negative.")
        # Registration values are frozen the first time the article is built
        if self.initial_stock is None:
            self.initial_stock = self.stock
        if self.initial_price is None:
            self.initial_price = self.price
        else:
            self.initial_price = to_money(self.initial_price)

    @property
    def stock_value(self) -> Decimal:
        return self.price * self.stock
