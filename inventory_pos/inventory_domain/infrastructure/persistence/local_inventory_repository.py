"""Local JSON-file implementation of the Inventory repository."""

import logging
from decimal import Decimal
from typing import Optional

from inventory_pos.common.persistence.local_json_store import LocalJsonStore
from inventory_pos.common.utils.date_utils import from_iso, to_iso
from inventory_pos.inventory_domain.domain.entities.article import Article
from inventory_pos.inventory_domain.domain.entities.sale import Sale
from inventory_pos.inventory_domain.domain.repositories.inventory_repository import IInventoryRepository

logger = logging.getLogger(__name__)

ARTICLES_KEY = "inventory_articles"
SALES_KEY = "inventory_sales"


class LocalInventoryRepository(IInventoryRepository):
    """Keeps articles and sales as two JSON lists, newest first, rewritten on every change."""

    def __init__(self, store: LocalJsonStore) -> None:
        self.store = store

    # --- Serialization ---

    @staticmethod
    def _article_to_dict(article: Article) -> dict:
        return {
            "id": article.id,
            "name": article.name,
            "imageUrl": article.image_url,
            "price": str(article.price),
            "stock": article.stock,
            "initialStock": article.initial_stock,
            "initialPrice": str(article.initial_price),
            "createdAt": to_iso(article.created_at),
        }

    @staticmethod
    def _dict_to_article(data: dict) -> Article:
        return Article(
            id=data["id"],
            name=data["name"],
            image_url=data.get("imageUrl") or "",
            price=Decimal(data["price"]),
            stock=int(data["stock"]),
            initial_stock=data.get("initialStock"),
            initial_price=Decimal(data["initialPrice"]) if data.get("initialPrice") is not None else None,
            created_at=from_iso(data.get("createdAt")),
        )

    @staticmethod
    def _sale_to_dict(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "articleId": sale.article_id,
            "articleName": sale.article_name,
            "quantity": sale.quantity,
            "unitPrice": str(sale.unit_price),
            "totalPrice": str(sale.total_price),
            "buyerName": sale.buyer_name,
            "paymentMethod": sale.payment_method.value,
            "bankName": sale.bank_name,
            "amountPaid": str(sale.amount_paid),
            "saleDate": to_iso(sale.sale_date),
        }

    @staticmethod
    def _dict_to_sale(data: dict) -> Sale:
        return Sale(
            id=data["id"],
            article_id=data["articleId"],
            article_name=data["articleName"],
            quantity=int(data["quantity"]),
            unit_price=Decimal(data["unitPrice"]),
            total_price=Decimal(data["totalPrice"]),
            buyer_name=data["buyerName"],
            payment_method=data["paymentMethod"],
            bank_name=data.get("bankName"),
            amount_paid=Decimal(data.get("amountPaid", "0")),
            sale_date=from_iso(data.get("saleDate")),
        )

    def _load_articles(self) -> list[dict]:
        return self.store.load(ARTICLES_KEY, [])

    def _load_sales(self) -> list[dict]:
        return self.store.load(SALES_KEY, [])

    # --- Articles ---

    def get_all_articles(self) -> list[Article]:
        return [self._dict_to_article(item) for item in self._load_articles()]

    def get_article_by_id(self, article_id: str) -> Optional[Article]:
        found = next((item for item in self._load_articles() if item["id"] == article_id), None)
        return self._dict_to_article(found) if found else None

    def insert_article(self, article: Article) -> Article:
        articles = self._load_articles()
        articles.insert(0, self._article_to_dict(article))
        self.store.save(ARTICLES_KEY, articles)
        logger.info(f"Article {article.id} ({article.name}) added to local store.")
        return article

    def update_article(self, article: Article) -> None:
        articles = self._load_articles()
        for item in articles:
            if item["id"] == article.id:
                item.update(
                    {
                        "name": article.name,
                        "imageUrl": article.image_url,
                        "price": str(article.price),
                        "stock": article.stock,
                    }
                )
                break
        else:
            logger.warning(f"Article with id {article.id} not found for update")
            return
        self.store.save(ARTICLES_KEY, articles)

    def update_article_stock(self, article_id: str, new_stock: int) -> None:
        articles = self._load_articles()
        for item in articles:
            if item["id"] == article_id:
                item["stock"] = new_stock
                break
        else:
            logger.warning(f"Article with id {article_id} not found for stock update")
            return
        self.store.save(ARTICLES_KEY, articles)

    def delete_article(self, article_id: str) -> None:
        articles = self._load_articles()
        remaining = [item for item in articles if item["id"] != article_id]
        if len(remaining) == len(articles):
            logger.warning(f"Article with id {article_id} not found for deletion")
            return
        self.store.save(ARTICLES_KEY, remaining)
        logger.info(f"Article {article_id} deleted from local store.")

    # --- Sales ---

    def get_all_sales(self) -> list[Sale]:
        return [self._dict_to_sale(item) for item in self._load_sales()]

    def get_sale_by_id(self, sale_id: str) -> Optional[Sale]:
        found = next((item for item in self._load_sales() if item["id"] == sale_id), None)
        return self._dict_to_sale(found) if found else None

    def insert_sale(self, sale: Sale) -> Sale:
        sales = self._load_sales()
        sales.insert(0, self._sale_to_dict(sale))
        self.store.save(SALES_KEY, sales)
        logger.info(f"Sale {sale.id} added to local store.")
        return sale

    def update_sale(self, sale: Sale) -> None:
        sales = self._load_sales()
        for index, item in enumerate(sales):
            if item["id"] == sale.id:
                sales[index] = self._sale_to_dict(sale)
                break
        else:
            logger.warning(f"Sale with id {sale.id} not found for update")
            return
        self.store.save(SALES_KEY, sales)

    def delete_sale(self, sale_id: str) -> None:
        sales = self._load_sales()
        remaining = [item for item in sales if item["id"] != sale_id]
        if len(remaining) == len(sales):
            logger.warning(f"Sale with id {sale_id} not found for deletion")
            return
        self.store.save(SALES_KEY, remaining)
        logger.info(f"Sale {sale_id} deleted from local store.")

    def sale_exists_for_article(self, article_id: str) -> bool:
        return any(item["articleId"] == article_id for item in self._load_sales())
