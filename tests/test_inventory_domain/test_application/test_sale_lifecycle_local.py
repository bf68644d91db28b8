"""End-to-end sale lifecycle against the local JSON backend."""

import os
from decimal import Decimal

import pytest

from inventory_pos.common.dtos.inventory_dtos import ArticleFormDTO, SaleEditDTO, SaleFormDTO
from inventory_pos.common.exceptions.custom_exceptions import (
    AmountExceedsTotalError,
    ArticleHasSalesError,
    InsufficientStockError,
    InvalidQuantityError,
    SaleNotFoundError,
)
from inventory_pos.inventory_domain.domain.entities.sale import PaymentMethod


def _sale_form(article_id: str, quantity: int, **overrides) -> SaleFormDTO:
    values = {"buyer_name": "Ana", "payment_method": "cash", "amount_paid": Decimal("0")}
    values.update(overrides)
    return SaleFormDTO(article_id=article_id, quantity=quantity, **values)


def _edit_form(sale, article_id: str, quantity: int, **overrides) -> SaleEditDTO:
    values = {
        "buyer_name": sale.buyer_name,
        "payment_method": sale.payment_method.value,
        "amount_paid": Decimal("0"),
        "bank_name": sale.bank_name,
    }
    values.update(overrides)
    return SaleEditDTO(id=sale.id, article_id=article_id, quantity=quantity, **values)


class TestSaleLifecycleLocal:
    @pytest.fixture(autouse=True)
    def _articles(self, local_inventory_service) -> None:
        self.service = local_inventory_service
        self.notebook = self.service.add_article(ArticleFormDTO(name="Notebook", price=Decimal("5"), stock=10))
        self.pencil = self.service.add_article(ArticleFormDTO(name="Pencil", price=Decimal("2"), stock=4))

    def _stock(self, article_id: str) -> int:
        return self.service.get_article(article_id).stock

    def test_create_edit_delete_round_trip(self) -> None:
        """Sell 3 of 10, edit to 5, delete: stock goes 7, 5 and back to 10."""
        sale = self.service.create_sale(_sale_form(self.notebook.id, 3, amount_paid=Decimal("15")))
        assert self._stock(self.notebook.id) == 7
        assert sale.total_price == Decimal("15")

        edited = self.service.edit_sale(_edit_form(sale, self.notebook.id, 5, amount_paid=Decimal("20")))
        assert self._stock(self.notebook.id) == 5
        assert edited.total_price == Decimal("25")
        assert edited.outstanding_balance == Decimal("5")

        self.service.delete_sale(sale.id)
        assert self._stock(self.notebook.id) == 10
        assert self.service.get_sales() == []

    def test_second_delete_changes_nothing(self) -> None:
        sale = self.service.create_sale(_sale_form(self.notebook.id, 3))
        self.service.delete_sale(sale.id)

        with pytest.raises(SaleNotFoundError):
            self.service.delete_sale(sale.id)

        assert self._stock(self.notebook.id) == 10

    def test_edit_to_same_values_is_idempotent(self) -> None:
        sale = self.service.create_sale(_sale_form(self.notebook.id, 3))

        self.service.edit_sale(_edit_form(sale, self.notebook.id, 3))
        self.service.edit_sale(_edit_form(sale, self.notebook.id, 3))

        assert self._stock(self.notebook.id) == 7

    def test_repointing_a_sale_moves_the_stock(self) -> None:
        sale = self.service.create_sale(_sale_form(self.notebook.id, 3))

        edited = self.service.edit_sale(_edit_form(sale, self.pencil.id, 2))

        assert self._stock(self.notebook.id) == 10
        assert self._stock(self.pencil.id) == 2
        assert edited.article_name == "Pencil"
        assert self.service.get_sale(sale.id).article_id == self.pencil.id

    def test_rejected_edit_leaves_everything_unchanged(self) -> None:
        sale = self.service.create_sale(_sale_form(self.notebook.id, 3))

        with pytest.raises(InsufficientStockError):
            self.service.edit_sale(_edit_form(sale, self.pencil.id, 5))

        assert self._stock(self.notebook.id) == 7
        assert self._stock(self.pencil.id) == 4
        assert self.service.get_sale(sale.id).quantity == 3

    def test_selling_more_than_stock_is_rejected(self) -> None:
        with pytest.raises(InsufficientStockError):
            self.service.create_sale(_sale_form(self.pencil.id, 5))

        assert self._stock(self.pencil.id) == 4
        assert self.service.get_sales() == []

    def test_amount_above_total_is_rejected(self) -> None:
        with pytest.raises(AmountExceedsTotalError):
            self.service.create_sale(_sale_form(self.pencil.id, 1, amount_paid=Decimal("3")))

        assert self._stock(self.pencil.id) == 4

    def test_no_payment_sale_is_fully_outstanding(self) -> None:
        sale = self.service.create_sale(
            _sale_form(self.notebook.id, 2, payment_method="no-payment", amount_paid=Decimal("7"))
        )

        stored = self.service.get_sale(sale.id)
        assert stored.payment_method is PaymentMethod.NO_PAYMENT
        assert stored.amount_paid == Decimal("0")
        assert stored.outstanding_balance == Decimal("10")

    def test_transfer_keeps_bank_name_until_method_changes(self) -> None:
        sale = self.service.create_sale(
            _sale_form(
                self.notebook.id, 1, payment_method="transfer", bank_name="Banco Norte", amount_paid=Decimal("5")
            )
        )
        assert self.service.get_sale(sale.id).bank_name == "Banco Norte"

        self.service.edit_sale(_edit_form(self.service.get_sale(sale.id), self.notebook.id, 1, payment_method="cash"))

        assert self.service.get_sale(sale.id).bank_name is None

    def test_article_with_sales_cannot_be_deleted(self) -> None:
        sale = self.service.create_sale(_sale_form(self.notebook.id, 1))

        with pytest.raises(ArticleHasSalesError):
            self.service.delete_article(self.notebook.id)

        self.service.delete_sale(sale.id)
        self.service.delete_article(self.notebook.id)
        assert [a.id for a in self.service.get_articles()] == [self.pencil.id]

    def test_sale_keeps_its_price_snapshot(self) -> None:
        """Later article price changes do not rewrite recorded sales."""
        sale = self.service.create_sale(_sale_form(self.notebook.id, 2))
        article = self.service.get_article(self.notebook.id)
        article.price = Decimal("9")
        self.service.inventory_repo.update_article(article)

        stored = self.service.get_sale(sale.id)
        assert stored.unit_price == Decimal("5")
        assert stored.total_price == Decimal("10")

    def test_article_image_is_copied_and_removed(self, tmp_path) -> None:
        image = tmp_path / "photo.png"
        image.write_bytes(b"\x89PNG")

        article = self.service.add_article(
            ArticleFormDTO(name="Eraser", price=Decimal("1"), stock=1, image_file=str(image))
        )
        stored_path = self.service.get_article(article.id).image_url
        assert stored_path.startswith(str(tmp_path / "images"))
        assert os.path.exists(stored_path)

        self.service.delete_article(article.id)
        assert not os.path.exists(stored_path)
        assert image.exists()

    def test_fractional_quantity_leaves_store_untouched(self) -> None:
        with pytest.raises(InvalidQuantityError):
            self.service.create_sale(_sale_form(self.notebook.id, 2.5))

        assert self._stock(self.notebook.id) == 10
        assert self.service.get_sales() == []

    def test_sub_cent_price_is_stored_rounded(self) -> None:
        """Prices are kept to cents, the same precision as the MySQL columns."""
        article = self.service.add_article(ArticleFormDTO(name="Clip", price=Decimal("1.005"), stock=3))

        sale = self.service.create_sale(_sale_form(article.id, 3))

        assert self.service.get_article(article.id).price == Decimal("1.01")
        assert self.service.get_sale(sale.id).total_price == Decimal("3.03")
