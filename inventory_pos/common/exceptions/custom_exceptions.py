"""Custom application-wide exceptions."""


class ApplicationError(Exception):
    """Base class for application-specific errors."""

    def __init__(
        self, message: str = "An application error occurred", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original error: {self.original_exception})"
        return self.message


class ConfigurationError(ApplicationError):
    """Exception raised when the application is configured with unsupported values."""


# --- Backend errors ---


class APIError(ApplicationError):
    """Exception raised for errors during external API calls (image store)."""

    def __init__(
        self,
        message: str = "API call failed",
        original_exception: Exception | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.status_code = status_code
        self.message = f"API Error: {message}"
        if status_code:
            self.message += f" (Status Code: {status_code})"


class DatabaseError(ApplicationError):
    """Exception raised for errors during database or local store operations."""

    def __init__(self, message: str = "Database operation failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Database Error: {message}"


class ImageStorageError(ApplicationError):
    """Exception raised when the local image directory cannot be read or written."""

    def __init__(
        self, message: str = "Image storage operation failed", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message, original_exception)
        self.message = f"Image Storage Error: {message}"


# --- Not-found errors ---


class NotFoundError(ApplicationError):
    """Exception raised when a referenced record does not exist."""


class ArticleNotFoundError(NotFoundError):
    def __init__(self, article_id: str) -> None:
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class SaleNotFoundError(NotFoundError):
    def __init__(self, sale_id: str) -> None:
        super().__init__(f"Sale not found: {sale_id}")
        self.sale_id = sale_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


# --- Validation errors ---


class ValidationError(ApplicationError):
    """Exception raised when input is rejected before anything is written."""


class InsufficientStockError(ValidationError):
    def __init__(self, article_id: str, available: int, requested: int) -> None:
        super().__init__(f"Insufficient stock for article {article_id}. Available: {available}, Requested: {requested}")
        self.article_id = article_id
        self.available = available
        self.requested = requested


class InvalidQuantityError(ValidationError):
    """Exception raised for zero or negative sale quantities."""


class InvalidPaymentError(ValidationError):
    """Exception raised for malformed payment data."""


class AmountExceedsTotalError(InvalidPaymentError):
    def __init__(self, amount_paid, total_price) -> None:
        super().__init__(f"Amount exceeds total: paid {amount_paid}, total {total_price}")
        self.amount_paid = amount_paid
        self.total_price = total_price


class MissingBankNameError(InvalidPaymentError):
    def __init__(self) -> None:
        super().__init__("Bank name is required for transfer payments")


class ArticleHasSalesError(ValidationError):
    def __init__(self, article_id: str) -> None:
        super().__init__(f"Cannot delete an article that has associated sales: {article_id}")
        self.article_id = article_id


class DuplicateBusinessError(ValidationError):
    def __init__(self, business_name: str) -> None:
        super().__init__(f"A business named '{business_name}' already exists")
        self.business_name = business_name


class InvalidSettingError(ValidationError):
    """Exception raised when a configuration value is out of range."""


class AuthenticationError(ApplicationError):
    """Exception raised when a PIN check fails or the account is disabled."""
