"""Main application entry point: prints an inventory report and exports it to Excel."""

import logging

from inventory_pos.common.config.dependencies import create_application, create_mysql_tables
from inventory_pos.common.config.settings import settings
from inventory_pos.common.exceptions.custom_exceptions import ApplicationError, DatabaseError
from inventory_pos.common.logger_config import setup_logging
from inventory_pos.inventory_domain.infrastructure.export.excel_exporter import ExcelInventoryExporter

logger = logging.getLogger(__name__)


def run_inventory_report() -> None:
    """Loads articles and sales from the configured backend, logs a summary and exports a workbook."""
    if settings.STORAGE_BACKEND.strip().lower() == "mysql":
        try:
            create_mysql_tables()  # Ensure tables exist each run (idempotent)
        except DatabaseError as e:
            logger.error(f"❌ Error creating database tables: {e}")
            raise

    app = create_application(settings)
    inventory_service = app.inventory_service

    try:
        summary = inventory_service.get_inventory_summary()
        logger.info("\n--- Inventory summary ---")
        logger.info(f"  Articles: {summary.article_count}, Sales: {summary.sale_count}")
        logger.info(f"  Inventory value: {summary.inventory_value}")
        logger.info(f"  Sales total: {summary.total_sales_value}")
        logger.info(f"  Collected: {summary.total_collected}, Outstanding: {summary.total_outstanding}")

        low_stock = inventory_service.get_low_stock_articles()
        if low_stock:
            logger.warning(
                f"{len(low_stock)} article(s) at or below {app.settings_service.settings.low_stock_threshold} units:"
            )
            for article in low_stock[:10]:
                logger.warning(f"    {article.name}: {article.stock} left")
    except ApplicationError as e:
        logger.error(f"An error occurred while building the inventory summary: {e}")
        return

    try:
        filepath = ExcelInventoryExporter().export(
            inventory_service.get_articles(), inventory_service.get_sales(), settings.EXPORT_DIR
        )
        logger.info(f"✅ Inventory exported to {filepath}")
    except ValueError:
        logger.info("Nothing to export yet.")
    except (ApplicationError, OSError) as e:
        logger.error(f"An error occurred during export: {e}")


if __name__ == "__main__":
    setup_logging(log_file="logs/inventory_pos.log")
    logger.info(f"Inventory report started (backend: {settings.STORAGE_BACKEND}).")
    run_inventory_report()
    logger.info("Inventory report finished.")
