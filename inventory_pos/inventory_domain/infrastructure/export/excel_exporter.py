"""Excel export of articles and sales."""

import logging
import os
from datetime import date

import openpyxl
from openpyxl.styles import Font, PatternFill

from inventory_pos.inventory_domain.domain.entities.article import Article
from inventory_pos.inventory_domain.domain.entities.sale import Sale

logger = logging.getLogger(__name__)

ARTICLE_HEADERS = ["ID", "Name", "Image URL", "Price", "Stock", "Initial Stock", "Initial Price", "Created"]
SALE_HEADERS = [
    "Sale ID",
    "Article",
    "Quantity",
    "Unit Price",
    "Total",
    "Amount Paid",
    "Outstanding",
    "Payment Method",
    "Bank",
    "Buyer",
    "Sale Date",
]


class ExcelInventoryExporter:
    """Writes an inventory_<date>.xlsx workbook with an Articles and a Sales sheet."""

    def export(
        self, articles: list[Article], sales: list[Sale], directory: str, export_date: date | None = None
    ) -> str:
        if not articles and not sales:
            raise ValueError("No data to export")

        export_date = export_date or date.today()
        os.makedirs(directory, exist_ok=True)
        filepath = os.path.join(directory, f"inventory_{export_date.isoformat()}.xlsx")

        workbook = openpyxl.Workbook()
        articles_sheet = workbook.active
        articles_sheet.title = "Articles"
        self._write_sheet(
            articles_sheet,
            ARTICLE_HEADERS,
            [
                [
                    article.id,
                    article.name,
                    article.image_url,
                    float(article.price),
                    article.stock,
                    article.initial_stock,
                    float(article.initial_price),
                    article.created_at.strftime("%Y-%m-%d") if article.created_at else "",
                ]
                for article in articles
            ],
        )

        sales_sheet = workbook.create_sheet("Sales")
        self._write_sheet(
            sales_sheet,
            SALE_HEADERS,
            [
                [
                    sale.id,
                    sale.article_name,
                    sale.quantity,
                    float(sale.unit_price),
                    float(sale.total_price),
                    float(sale.amount_paid),
                    float(sale.outstanding_balance),
                    sale.payment_method.value,
                    sale.bank_name or "",
                    sale.buyer_name,
                    sale.sale_date.strftime("%Y-%m-%d") if sale.sale_date else "",
                ]
                for sale in sales
            ],
        )

        workbook.save(filepath)
        logger.info(f"Exported {len(articles)} articles and {len(sales)} sales to {filepath}")
        return filepath

    def _write_sheet(self, worksheet, headers: list[str], rows: list[list]) -> None:
        for col, header in enumerate(headers, 1):
            cell = worksheet.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True)
            cell.fill = PatternFill(start_color="CCCCCC", end_color="CCCCCC", fill_type="solid")

        for row_idx, row in enumerate(rows, 2):
            for col_idx, value in enumerate(row, 1):
                worksheet.cell(row=row_idx, column=col_idx, value=value)

        self._adjust_columns(worksheet)

    def _adjust_columns(self, worksheet) -> None:
        """Auto-adjust column widths."""
        for column in worksheet.columns:
            max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
            worksheet.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)
