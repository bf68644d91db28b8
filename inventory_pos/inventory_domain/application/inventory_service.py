# inventory_pos/inventory_domain/application/inventory_service.py
"""Application service for articles, sales and the stock they move."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Callable

from inventory_pos.common.dtos.inventory_dtos import (
    ArticleFormDTO,
    ArticleUpdateDTO,
    InventorySummaryDTO,
    SaleEditDTO,
    SaleFormDTO,
)
from inventory_pos.common.exceptions.custom_exceptions import (
    ArticleHasSalesError,
    ArticleNotFoundError,
    SaleNotFoundError,
    ValidationError,
)
from inventory_pos.inventory_domain.domain.entities.article import Article
from inventory_pos.inventory_domain.domain.entities.sale import Sale
from inventory_pos.inventory_domain.domain.repositories.image_storage import IImageStorage
from inventory_pos.inventory_domain.domain.repositories.inventory_repository import IInventoryRepository
from inventory_pos.inventory_domain.domain.services.stock_reconciliation import (
    normalize_payment,
    plan_sale_creation,
    plan_sale_deletion,
    plan_sale_edit,
)
from inventory_pos.settings_domain.domain.entities.app_settings import AppSettings

logger = logging.getLogger(__name__)


class InventoryApplicationService:
    """
    Runs article and sale operations against one repository.

    Multi-write operations are not transactional. When a later write fails,
    the writes already done by the same call are undone in reverse order
    (one attempt each) and the original error is re-raised.
    """

    def __init__(
        self, inventory_repo: IInventoryRepository, image_storage: IImageStorage, app_settings: AppSettings
    ) -> None:
        self.inventory_repo = inventory_repo
        self.image_storage = image_storage
        self.app_settings = app_settings

    # --- Helpers ---

    def _require_article(self, article_id: str) -> Article:
        article = self.inventory_repo.get_article_by_id(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    def _require_sale(self, sale_id: str) -> Sale:
        sale = self.inventory_repo.get_sale_by_id(sale_id)
        if sale is None:
            raise SaleNotFoundError(sale_id)
        return sale

    @staticmethod
    def _compensate(undo_steps: list[tuple[str, Callable[[], None]]]) -> None:
        """Runs undo steps newest first; a failing step is logged and the rest still run."""
        for description, undo in reversed(undo_steps):
            try:
                undo()
                logger.info(f"Compensation applied: {description}")
            except Exception as e:
                logger.error(f"Compensation failed ({description}): {e}")

    def _remove_image_quietly(self, image_url: str) -> None:
        if not image_url:
            return
        try:
            self.image_storage.delete_image(image_url)
        except Exception as e:
            logger.error(f"Could not remove image {image_url}: {e}")

    # --- Reads ---

    def get_articles(self) -> list[Article]:
        return self.inventory_repo.get_all_articles()

    def get_article(self, article_id: str) -> Article:
        return self._require_article(article_id)

    def get_sales(self) -> list[Sale]:
        return self.inventory_repo.get_all_sales()

    def get_sale(self, sale_id: str) -> Sale:
        return self._require_sale(sale_id)

    def get_low_stock_articles(self) -> list[Article]:
        """Articles whose stock is at or below the configured low-stock threshold."""
        threshold = self.app_settings.low_stock_threshold
        return [article for article in self.get_articles() if article.stock <= threshold]

    def get_inventory_summary(self) -> InventorySummaryDTO:
        articles = self.get_articles()
        sales = self.get_sales()
        threshold = self.app_settings.low_stock_threshold

        return InventorySummaryDTO(
            article_count=len(articles),
            sale_count=len(sales),
            inventory_value=sum((a.stock_value for a in articles), Decimal("0")),
            total_sales_value=sum((s.total_price for s in sales), Decimal("0")),
            total_collected=sum((s.amount_paid for s in sales), Decimal("0")),
            total_outstanding=sum((s.outstanding_balance for s in sales), Decimal("0")),
            low_stock_count=sum(1 for a in articles if a.stock <= threshold),
        )

    # --- Articles ---

    def add_article(self, form: ArticleFormDTO) -> Article:
        """Registers an article, uploading its image first."""
        try:
            article = Article(name=form.name, price=form.price, stock=form.stock)
        except ValueError as e:
            raise ValidationError(str(e))

        if form.image_file:
            article.image_url = self.image_storage.upload_image(form.image_file)

        try:
            self.inventory_repo.insert_article(article)
        except Exception:
            self._remove_image_quietly(article.image_url)
            raise

        logger.info(f"Article registered: {article.name} (stock {article.stock}, price {article.price})")
        return article

    def update_article(self, form: ArticleUpdateDTO) -> Article:
        """Edits name, price, stock and optionally the image of an article."""
        current = self._require_article(form.id)
        try:
            updated = replace(current, name=form.name, price=form.price, stock=form.stock)
        except ValueError as e:
            raise ValidationError(str(e))

        new_image_url = None
        if form.image_file:
            new_image_url = self.image_storage.upload_image(form.image_file)
            updated.image_url = new_image_url

        try:
            self.inventory_repo.update_article(updated)
        except Exception:
            if new_image_url:
                self._remove_image_quietly(new_image_url)
            raise

        if new_image_url and current.image_url and current.image_url != new_image_url:
            self._remove_image_quietly(current.image_url)

        logger.info(f"Article updated: {updated.id} ({updated.name})")
        return updated

    def delete_article(self, article_id: str) -> None:
        """Deletes an article that no sale references, then its image."""
        article = self._require_article(article_id)
        if self.inventory_repo.sale_exists_for_article(article_id):
            raise ArticleHasSalesError(article_id)

        self.inventory_repo.delete_article(article_id)
        self._remove_image_quietly(article.image_url)
        logger.info(f"Article deleted: {article_id} ({article.name})")

    # --- Sales ---

    def create_sale(self, form: SaleFormDTO) -> Sale:
        """Records a sale and takes its quantity out of the article's stock."""
        article = self._require_article(form.article_id)
        total_price, stock_change = plan_sale_creation(article, form.quantity)
        payment = normalize_payment(form.payment_method, form.amount_paid, form.bank_name, total_price)

        sale = Sale(
            article_id=article.id,
            article_name=article.name,
            unit_price=article.price,
            quantity=form.quantity,
            total_price=total_price,
            buyer_name=form.buyer_name,
            payment_method=payment.method,
            amount_paid=payment.amount_paid,
            bank_name=payment.bank_name,
        )

        self.inventory_repo.insert_sale(sale)
        try:
            self.inventory_repo.update_article_stock(stock_change.article_id, stock_change.new_stock)
        except Exception as e:
            logger.error(f"Stock update failed after inserting sale {sale.id}: {e}")
            self._compensate([(f"delete sale {sale.id}", lambda: self.inventory_repo.delete_sale(sale.id))])
            raise

        logger.info(
            f"Sale {sale.id} created: {sale.quantity} x {sale.article_name}, total {sale.total_price}, "
            f"stock {stock_change.previous_stock} -> {stock_change.new_stock}"
        )
        return sale

    def edit_sale(self, form: SaleEditDTO) -> Sale:
        """
        Edits a sale, possibly moving it to another article.

        The total is recomputed from the current price of the referenced
        article. Every stock change is validated before the first write.
        """
        original_sale = self._require_sale(form.id)
        new_article = self._require_article(form.article_id)
        if original_sale.article_id == new_article.id:
            original_article = new_article
        else:
            original_article = self._require_article(original_sale.article_id)

        stock_changes = plan_sale_edit(original_sale, original_article, new_article, form.quantity)
        total_price = new_article.price * form.quantity
        payment = normalize_payment(form.payment_method, form.amount_paid, form.bank_name, total_price)

        updated_sale = replace(
            original_sale,
            article_id=new_article.id,
            article_name=new_article.name,
            unit_price=new_article.price,
            quantity=form.quantity,
            total_price=total_price,
            buyer_name=form.buyer_name,
            payment_method=payment.method,
            amount_paid=payment.amount_paid,
            bank_name=payment.bank_name,
        )

        self.inventory_repo.update_sale(updated_sale)
        undo_steps = [(f"restore sale {original_sale.id}", lambda: self.inventory_repo.update_sale(original_sale))]
        try:
            for change in stock_changes:
                self.inventory_repo.update_article_stock(change.article_id, change.new_stock)
                undo_steps.append(
                    (
                        f"restore stock of article {change.article_id} to {change.previous_stock}",
                        lambda change=change: self.inventory_repo.update_article_stock(
                            change.article_id, change.previous_stock
                        ),
                    )
                )
        except Exception as e:
            logger.error(f"Stock update failed while editing sale {original_sale.id}: {e}")
            self._compensate(undo_steps)
            raise

        logger.info(
            f"Sale {updated_sale.id} edited: {updated_sale.quantity} x {updated_sale.article_name}, "
            f"total {updated_sale.total_price}"
        )
        return updated_sale

    def delete_sale(self, sale_id: str) -> None:
        """Gives the sale's quantity back to its article, then deletes the sale."""
        sale = self._require_sale(sale_id)
        article = self._require_article(sale.article_id)
        stock_change = plan_sale_deletion(sale, article)

        self.inventory_repo.update_article_stock(stock_change.article_id, stock_change.new_stock)
        try:
            self.inventory_repo.delete_sale(sale_id)
        except Exception as e:
            logger.error(f"Deleting sale {sale_id} failed after restoring stock: {e}")
            self._compensate(
                [
                    (
                        f"restore stock of article {article.id} to {stock_change.previous_stock}",
                        lambda: self.inventory_repo.update_article_stock(article.id, stock_change.previous_stock),
                    )
                ]
            )
            raise

        logger.info(
            f"Sale {sale_id} deleted, stock of {article.name}: "
            f"{stock_change.previous_stock} -> {stock_change.new_stock}"
        )
