# inventory_pos/inventory_domain/infrastructure/persistence/mysql_inventory_repository.py
"""MySQL implementation of the Inventory repository."""

import logging
from decimal import Decimal
from typing import Optional

from inventory_pos.common.persistence.mysql_repository_base import MySQLRepositoryBase
from inventory_pos.common.utils.date_utils import format_datetime_for_db, parse_db_datetime
from inventory_pos.inventory_domain.domain.entities.article import Article
from inventory_pos.inventory_domain.domain.entities.sale import Sale
from inventory_pos.inventory_domain.domain.repositories.inventory_repository import IInventoryRepository

logger = logging.getLogger(__name__)

ARTICLE_COLUMNS = "id, name, image_url, price, stock, initial_stock, initial_price, created_at"
SALE_COLUMNS = (
    "id, article_id, article_name, quantity, unit_price, total_price, buyer_name, "
    "payment_method, bank_name, amount_paid, sale_date"
)


class MySQLInventoryRepository(MySQLRepositoryBase, IInventoryRepository):
    """MySQL implementation of the Inventory repository (tables pos_articles and pos_sales)."""

    def create_tables(self) -> None:
        """Creates the article and sale tables with 'pos_' prefix."""
        create_articles_table_query = """
        CREATE TABLE IF NOT EXISTS pos_articles (
            id CHAR(36) PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            image_url VARCHAR(1024) NOT NULL DEFAULT '',
            price DECIMAL(12, 2) NOT NULL,
            stock INT UNSIGNED NOT NULL DEFAULT 0,
            initial_stock INT UNSIGNED NOT NULL DEFAULT 0,
            initial_price DECIMAL(12, 2) NOT NULL,
            created_at DATETIME NOT NULL,
            INDEX idx_created_at (created_at)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        # No ON DELETE CASCADE: article deletion is guarded by sale_exists_for_article
        create_sales_table_query = """
        CREATE TABLE IF NOT EXISTS pos_sales (
            id CHAR(36) PRIMARY KEY,
            article_id CHAR(36) NOT NULL,
            article_name VARCHAR(255) NOT NULL,
            quantity INT UNSIGNED NOT NULL,
            unit_price DECIMAL(12, 2) NOT NULL,
            total_price DECIMAL(12, 2) NOT NULL,
            buyer_name VARCHAR(255) NOT NULL,
            payment_method VARCHAR(20) NOT NULL,
            bank_name VARCHAR(255),
            amount_paid DECIMAL(12, 2) NOT NULL DEFAULT 0,
            sale_date DATETIME NOT NULL,
            INDEX idx_article_id (article_id),
            INDEX idx_sale_date (sale_date),
            CONSTRAINT fk_sales_article FOREIGN KEY (article_id) REFERENCES pos_articles (id)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        self._create_table(create_articles_table_query, "pos_articles")
        self._create_table(create_sales_table_query, "pos_sales")

    # --- Row mapping ---

    @staticmethod
    def _row_to_article(row: dict) -> Article:
        return Article(
            id=row["id"],
            name=row["name"],
            image_url=row.get("image_url") or "",
            price=Decimal(str(row["price"])),
            stock=int(row["stock"]),
            initial_stock=int(row["initial_stock"]),
            initial_price=Decimal(str(row["initial_price"])),
            created_at=parse_db_datetime(row["created_at"]),
        )

    @staticmethod
    def _row_to_sale(row: dict) -> Sale:
        return Sale(
            id=row["id"],
            article_id=row["article_id"],
            article_name=row["article_name"],
            quantity=int(row["quantity"]),
            unit_price=Decimal(str(row["unit_price"])),
            total_price=Decimal(str(row["total_price"])),
            buyer_name=row["buyer_name"],
            payment_method=row["payment_method"],
            bank_name=row.get("bank_name"),
            amount_paid=Decimal(str(row["amount_paid"])),
            sale_date=parse_db_datetime(row["sale_date"]),
        )

    # --- Articles ---

    def get_all_articles(self) -> list[Article]:
        rows = self._fetch_all(
            f"SELECT {ARTICLE_COLUMNS} FROM pos_articles ORDER BY created_at DESC", (), "Error fetching articles"
        )
        return [self._row_to_article(row) for row in rows]

    def get_article_by_id(self, article_id: str) -> Optional[Article]:
        row = self._fetch_one(
            f"SELECT {ARTICLE_COLUMNS} FROM pos_articles WHERE id = %s",
            (article_id,),
            f"Error fetching article {article_id}",
        )
        return self._row_to_article(row) if row else None

    def insert_article(self, article: Article) -> Article:
        insert_query = f"""
        INSERT INTO pos_articles ({ARTICLE_COLUMNS})
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
        """
        params = (
            article.id,
            article.name,
            article.image_url,
            article.price,
            article.stock,
            article.initial_stock,
            article.initial_price,
            format_datetime_for_db(article.created_at),
        )
        self._execute_write(insert_query, params, f"Error inserting article {article.name}")
        logger.info(f"Article {article.id} ({article.name}) inserted.")
        return article

    def update_article(self, article: Article) -> None:
        update_query = """
        UPDATE pos_articles SET name = %s, image_url = %s, price = %s, stock = %s
        WHERE id = %s
        """
        rowcount = self._execute_write(
            update_query,
            (article.name, article.image_url, article.price, article.stock, article.id),
            f"Error updating article {article.id}",
        )
        if rowcount == 0:
            logger.warning(f"Article with id {article.id} not found for update")

    def update_article_stock(self, article_id: str, new_stock: int) -> None:
        rowcount = self._execute_write(
            "UPDATE pos_articles SET stock = %s WHERE id = %s",
            (new_stock, article_id),
            f"Error updating stock of article {article_id}",
        )
        if rowcount == 0:
            logger.warning(f"Article with id {article_id} not found for stock update")

    def delete_article(self, article_id: str) -> None:
        rowcount = self._execute_write(
            "DELETE FROM pos_articles WHERE id = %s", (article_id,), f"Error deleting article {article_id}"
        )
        if rowcount == 0:
            logger.warning(f"Article with id {article_id} not found for deletion")
        else:
            logger.info(f"Article {article_id} deleted successfully.")

    # --- Sales ---

    def get_all_sales(self) -> list[Sale]:
        rows = self._fetch_all(
            f"SELECT {SALE_COLUMNS} FROM pos_sales ORDER BY sale_date DESC", (), "Error fetching sales"
        )
        return [self._row_to_sale(row) for row in rows]

    def get_sale_by_id(self, sale_id: str) -> Optional[Sale]:
        row = self._fetch_one(
            f"SELECT {SALE_COLUMNS} FROM pos_sales WHERE id = %s", (sale_id,), f"Error fetching sale {sale_id}"
        )
        return self._row_to_sale(row) if row else None

    def insert_sale(self, sale: Sale) -> Sale:
        insert_query = f"""
        INSERT INTO pos_sales ({SALE_COLUMNS})
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        """
        params = (
            sale.id,
            sale.article_id,
            sale.article_name,
            sale.quantity,
            sale.unit_price,
            sale.total_price,
            sale.buyer_name,
            sale.payment_method.value,
            sale.bank_name,
            sale.amount_paid,
            format_datetime_for_db(sale.sale_date),
        )
        self._execute_write(insert_query, params, f"Error inserting sale for article {sale.article_id}")
        logger.info(f"Sale {sale.id} inserted for article {sale.article_id}.")
        return sale

    def update_sale(self, sale: Sale) -> None:
        update_query = """
        UPDATE pos_sales SET
            article_id = %s, article_name = %s, quantity = %s, unit_price = %s, total_price = %s,
            buyer_name = %s, payment_method = %s, bank_name = %s, amount_paid = %s
        WHERE id = %s
        """
        params = (
            sale.article_id,
            sale.article_name,
            sale.quantity,
            sale.unit_price,
            sale.total_price,
            sale.buyer_name,
            sale.payment_method.value,
            sale.bank_name,
            sale.amount_paid,
            sale.id,
        )
        rowcount = self._execute_write(update_query, params, f"Error updating sale {sale.id}")
        if rowcount == 0:
            logger.warning(f"Sale with id {sale.id} not found for update")

    def delete_sale(self, sale_id: str) -> None:
        rowcount = self._execute_write(
            "DELETE FROM pos_sales WHERE id = %s", (sale_id,), f"Error deleting sale {sale_id}"
        )
        if rowcount == 0:
            logger.warning(f"Sale with id {sale_id} not found for deletion")
        else:
            logger.info(f"Sale {sale_id} deleted successfully.")

    def sale_exists_for_article(self, article_id: str) -> bool:
        row = self._fetch_one(
            "SELECT id FROM pos_sales WHERE article_id = %s LIMIT 1",
            (article_id,),
            f"Error checking sales for article {article_id}",
        )
        return row is not None
