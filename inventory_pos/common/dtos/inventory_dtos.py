"""Data Transfer Objects for inventory and sale input coming from the UI layer."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class ArticleFormDTO:
    """DTO for registering a new article."""

    name: str
    price: Decimal
    stock: int
    image_file: Optional[str] = None  # Local path of an image to upload to the image store


@dataclass
class ArticleUpdateDTO:
    """DTO for editing an existing article. A new image_file replaces the current image."""

    id: str
    name: str
    price: Decimal
    stock: int
    image_file: Optional[str] = None


@dataclass
class SaleFormDTO:
    """DTO for a sale recorded at the point of sale."""

    article_id: str
    quantity: int
    buyer_name: str
    payment_method: str
    amount_paid: Decimal = Decimal("0")
    bank_name: Optional[str] = None


@dataclass
class SaleEditDTO:
    """DTO for editing a sale; article_id may point to a different article."""

    id: str
    article_id: str
    quantity: int
    buyer_name: str
    payment_method: str
    amount_paid: Decimal = Decimal("0")
    bank_name: Optional[str] = None


@dataclass
class InventorySummaryDTO:
    """Dashboard figures computed from the current articles and sales."""

    article_count: int
    sale_count: int
    inventory_value: Decimal
    total_sales_value: Decimal
    total_collected: Decimal
    total_outstanding: Decimal
    low_stock_count: int
