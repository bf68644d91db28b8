# inventory_pos/inventory_domain/domain/services/stock_reconciliation.py
"""
Stock arithmetic for the sale lifecycle.

These functions only compute and validate; they never touch storage, so every
backend goes through the same rules. Each planner raises before returning if
any resulting stock would be negative.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from inventory_pos.common.exceptions.custom_exceptions import (
    AmountExceedsTotalError,
    InsufficientStockError,
    InvalidPaymentError,
    InvalidQuantityError,
    MissingBankNameError,
)
from inventory_pos.common.utils.money_utils import is_whole_number, to_money
from inventory_pos.inventory_domain.domain.entities.article import Article
from inventory_pos.inventory_domain.domain.entities.sale import PaymentMethod, Sale


@dataclass(frozen=True)
class StockChange:
    """A stock value to write for one article, with the value it replaces."""

    article_id: str
    previous_stock: int
    new_stock: int

    @property
    def delta(self) -> int:
        return self.new_stock - self.previous_stock


@dataclass(frozen=True)
class PaymentDetails:
    method: PaymentMethod
    amount_paid: Decimal
    bank_name: Optional[str]


def normalize_payment(
    method: PaymentMethod | str, amount_paid: Decimal | None, bank_name: str | None, total_price: Decimal
) -> PaymentDetails:
    """
    Applies the payment rules for a sale.

    - "no-payment" always stores an amount of 0.
    - Only "transfer" keeps a bank name, and requires one.
    - The amount paid must lie between 0 and the total price.
    """
    try:
        method = PaymentMethod(method)
    except ValueError:
        raise InvalidPaymentError(f"Unknown payment method: {method}")

    if method is PaymentMethod.NO_PAYMENT or amount_paid is None:
        amount = Decimal("0.00")
    else:
        try:
            amount = to_money(amount_paid)
        except ValueError:
            raise InvalidPaymentError(f"Amount paid is not a valid amount: {amount_paid!r}")

    if method is PaymentMethod.TRANSFER:
        bank_name = (bank_name or "").strip()
        if not bank_name:
            raise MissingBankNameError()
    else:
        bank_name = None

    if amount < 0:
        raise InvalidPaymentError(f"Amount paid cannot be negative: {amount}")
    if amount > total_price:
        raise AmountExceedsTotalError(amount, total_price)

    return PaymentDetails(method=method, amount_paid=amount, bank_name=bank_name)


def _check_quantity(quantity: int) -> None:
    if not is_whole_number(quantity):
        raise InvalidQuantityError(f"Quantity must be a whole number, got {quantity!r}")
    if quantity <= 0:
        raise InvalidQuantityError(f"Quantity must be greater than zero, got {quantity}")


def plan_sale_creation(article: Article, quantity: int) -> tuple[Decimal, StockChange]:
    """Returns the total price and the stock change for selling quantity units of article."""
    _check_quantity(quantity)
    if quantity > article.stock:
        raise InsufficientStockError(article.id, article.stock, quantity)

    total_price = article.price * quantity
    return total_price, StockChange(article.id, article.stock, article.stock - quantity)


def plan_sale_edit(
    original_sale: Sale, original_article: Article, new_article: Article, new_quantity: int
) -> list[StockChange]:
    """
    Computes the stock writes for editing a sale.

    Same article: one write of stock + (old quantity - new quantity).
    Repointed article: the old article gets its quantity back and the new one
    loses the new quantity, as two independent writes.
    """
    _check_quantity(new_quantity)

    if original_sale.article_id == new_article.id:
        changes = [
            StockChange(
                new_article.id,
                new_article.stock,
                new_article.stock + (original_sale.quantity - new_quantity),
            )
        ]
    else:
        changes = [
            StockChange(
                original_article.id,
                original_article.stock,
                original_article.stock + original_sale.quantity,
            ),
            StockChange(new_article.id, new_article.stock, new_article.stock - new_quantity),
        ]

    for change in changes:
        if change.new_stock < 0:
            raise InsufficientStockError(
                change.article_id, change.previous_stock, change.previous_stock - change.new_stock
            )

    return changes


def plan_sale_deletion(sale: Sale, article: Article) -> StockChange:
    """Returns the stock change that gives a deleted sale's units back to its article."""
    return StockChange(article.id, article.stock, article.stock + sale.quantity)
