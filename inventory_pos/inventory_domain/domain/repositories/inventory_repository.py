# inventory_pos/inventory_domain/domain/repositories/inventory_repository.py
"""Inventory (articles and sales) repository interface."""
from abc import ABC, abstractmethod
from typing import Optional

from inventory_pos.inventory_domain.domain.entities.article import Article
from inventory_pos.inventory_domain.domain.entities.sale import Sale


class IInventoryRepository(ABC):

    @abstractmethod
    def get_all_articles(self) -> list[Article]:
        """Retrieves all articles, newest first."""
        pass

    @abstractmethod
    def get_article_by_id(self, article_id: str) -> Optional[Article]:
        """Retrieves a single article, or None if it does not exist."""
        pass

    @abstractmethod
    def insert_article(self, article: Article) -> Article:
        """Persists a new article."""
        pass

    @abstractmethod
    def update_article(self, article: Article) -> None:
        """Overwrites name, image, price and stock of an existing article."""
        pass

    @abstractmethod
    def update_article_stock(self, article_id: str, new_stock: int) -> None:
        """Writes the stock column of one article."""
        pass

    @abstractmethod
    def delete_article(self, article_id: str) -> None:
        """Deletes an article by id."""
        pass

    @abstractmethod
    def get_all_sales(self) -> list[Sale]:
        """Retrieves all sales, newest first."""
        pass

    @abstractmethod
    def get_sale_by_id(self, sale_id: str) -> Optional[Sale]:
        """Retrieves a single sale, or None if it does not exist."""
        pass

    @abstractmethod
    def insert_sale(self, sale: Sale) -> Sale:
        """Persists a new sale."""
        pass

    @abstractmethod
    def update_sale(self, sale: Sale) -> None:
        """Overwrites every field of an existing sale."""
        pass

    @abstractmethod
    def delete_sale(self, sale_id: str) -> None:
        """Deletes a sale by id."""
        pass

    @abstractmethod
    def sale_exists_for_article(self, article_id: str) -> bool:
        """Checks whether at least one sale references the article."""
        pass
