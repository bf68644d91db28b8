"""Operational settings entity."""

from dataclasses import asdict, dataclass, field, fields

DEFAULT_LOW_STOCK_THRESHOLD = 5
DEFAULT_SESSION_TIMEOUT_MINUTES = 30
COLOR_THEMES = ("blue", "green", "purple", "orange", "red")


@dataclass
class AppSettings:
    """
    Settings shared by the services of one running application.

    A single instance is loaded at startup and handed to every service that
    needs it; the settings service mutates it in place and persists it.
    """

    product_categories: list[str] = field(default_factory=list)
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    enable_lot_and_expiry: bool = False
    session_timeout_minutes: int = DEFAULT_SESSION_TIMEOUT_MINUTES
    dark_mode: bool = False
    color_theme: str = "blue"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        """Builds settings from stored values, ignoring unknown keys and keeping defaults for missing ones."""
        valid_keys = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in valid_keys})

    def replace_with(self, other: "AppSettings") -> None:
        """Copies every value of other into this instance."""
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))
