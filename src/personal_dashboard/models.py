"""Data models and constants for the personal dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Application identity, used for platformdirs config paths
CONFIG_APP_NAME = "personal-dashboard"

DEFAULT_BASE_URL = "https://backend1.study-with-me.org"
LOCAL_TOKEN = "local"

# Screens. Exactly one is active; it selects both the key handlers and the view.
SCREEN_MENU = "menu"
SCREEN_FOOD_LIST = "food_list"
SCREEN_FOOD_RECIPE = "food_recipe"
SCREEN_FOOD_CHECKOUT = "food_checkout"
SCREEN_FOOD_CHECKOUT_PROCESSING = "food_checkout_processing"
SCREEN_SUBSCRIPTIONS = "subscriptions"
SCREEN_ACADEMICS = "academics"
SCREEN_ACADEMICS_SYNCING = "academics_syncing"
SCREEN_FOOD_FORM = "food_form"
SCREEN_SUBSCRIPTION_FORM = "subscription_form"

ALL_SCREENS = (
    SCREEN_MENU,
    SCREEN_FOOD_LIST,
    SCREEN_FOOD_RECIPE,
    SCREEN_FOOD_CHECKOUT,
    SCREEN_FOOD_CHECKOUT_PROCESSING,
    SCREEN_SUBSCRIPTIONS,
    SCREEN_ACADEMICS,
    SCREEN_ACADEMICS_SYNCING,
    SCREEN_FOOD_FORM,
    SCREEN_SUBSCRIPTION_FORM,
)
FORM_SCREENS = frozenset({SCREEN_FOOD_FORM, SCREEN_SUBSCRIPTION_FORM})
BLOCKING_SCREENS = frozenset({SCREEN_FOOD_CHECKOUT_PROCESSING, SCREEN_ACADEMICS_SYNCING})

# Remote category names
CATEGORY_FOOD = "Food"
CATEGORY_SUBSCRIPTIONS = "Subscriptions"
CATEGORY_ACADEMICS = "Academics"
CATEGORY_NAMES = (CATEGORY_FOOD, CATEGORY_SUBSCRIPTIONS, CATEGORY_ACADEMICS)

FORM_KIND_FOOD = "food"
FORM_KIND_SUBSCRIPTION = "subscription"

MENU_CHOICES = (
    "🛒 Food (Tracking, Recipes & Shopping)",
    "💳 Subscriptions (Payments & Dates)",
    "📚 Academics (Scraped Assignments)",
)
MENU_TARGETS = (SCREEN_FOOD_LIST, SCREEN_SUBSCRIPTIONS, SCREEN_ACADEMICS)

DELIVERY_CHOICES = (
    "🚚 Delivery (+$3.00)",
    "🏪 Pick Up (Free)",
)
DELIVERY_FEES = (3.00, 0.00)

CYCLE_CHOICES = ("Monthly", "Quarterly", "Yearly")

AUTO_RENEW_RESTOCK_QTY = 3

# Form layout: every form has four logical fields (the subscription form's
# fourth field is the cycle selector rather than a text input).
FORM_FIELD_COUNT = 4
FORM_CHAR_LIMIT = 32
FOOD_FORM_PLACEHOLDERS = (
    "Food Name",
    "Price per unit",
    "Current Stock Amount",
    "Auto-Renew Threshold (0 = disabled)",
)
SUBSCRIPTION_FORM_PLACEHOLDERS = (
    "Service Name",
    "Price",
    "Payment Date",
)
DEFAULT_DUE_DATE = "TBD"

# Config bounds
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
MAX_REQUEST_TIMEOUT_SECONDS = 300
DEFAULT_CHECKOUT_DELAY_SECONDS = 1.5
MAX_CHECKOUT_DELAY_SECONDS = 30.0


@dataclass(slots=True)
class FoodItem:
    """A pantry item with its stock level and transient cart quantity."""

    name: str
    price: float = 0.0
    amount: int = 0
    renew_threshold: int = 0  # 0 = auto-renew disabled
    cart_qty: int = 0  # never sent to the remote store


@dataclass(slots=True)
class SubscriptionItem:
    """A recurring payment."""

    name: str
    price: float = 0.0
    due_date: str = DEFAULT_DUE_DATE
    cycle: str = CYCLE_CHOICES[0]


@dataclass(slots=True)
class StudyItem:
    """An academic deadline produced by a remote sync or scrape."""

    name: str
    due_date: str = ""


@dataclass(slots=True)
class Category:
    """A named remote grouping holding one decoded collection."""

    id: str
    owner_token: str
    name: str
    items: list[Any] = field(default_factory=list)


@dataclass(slots=True)
class FormField:
    """One text input of an open form."""

    placeholder: str
    value: str = ""
    focused: bool = False


@dataclass(slots=True)
class FormState:
    """State of the add/edit form while a form screen is active."""

    kind: str  # FORM_KIND_FOOD | FORM_KIND_SUBSCRIPTION
    fields: list[FormField]
    focus: int = 0
    edit_index: int | None = None  # None = creating a new item
    cycle_index: int = 0

    @property
    def is_edit(self) -> bool:
        return self.edit_index is not None


@dataclass(slots=True)
class Session:
    """Everything the dashboard knows; threaded through the reducer by value."""

    token: str
    screen: str = SCREEN_MENU
    cursor: int = 0
    status: str = ""
    food: list[FoodItem] = field(default_factory=list)
    subscriptions: list[SubscriptionItem] = field(default_factory=list)
    study: list[StudyItem] = field(default_factory=list)
    category_ids: dict[str, str] = field(default_factory=dict)
    form: FormState | None = None
    recipe_text: str = ""
    recipe_pending: bool = False


@dataclass(slots=True)
class UserConfig:
    """User configuration loaded from the platform config directory."""

    base_url: str = DEFAULT_BASE_URL
    request_timeout_seconds: int = DEFAULT_REQUEST_TIMEOUT_SECONDS
    checkout_delay_seconds: float = DEFAULT_CHECKOUT_DELAY_SECONDS
    require_token: bool = False  # False = fall back to local mode without --token
    version: int = 1


__all__ = [
    "ALL_SCREENS",
    "AUTO_RENEW_RESTOCK_QTY",
    "BLOCKING_SCREENS",
    "CATEGORY_ACADEMICS",
    "CATEGORY_FOOD",
    "CATEGORY_NAMES",
    "CATEGORY_SUBSCRIPTIONS",
    "CONFIG_APP_NAME",
    "CYCLE_CHOICES",
    "DEFAULT_BASE_URL",
    "DEFAULT_CHECKOUT_DELAY_SECONDS",
    "DEFAULT_DUE_DATE",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DELIVERY_CHOICES",
    "DELIVERY_FEES",
    "FOOD_FORM_PLACEHOLDERS",
    "FORM_CHAR_LIMIT",
    "FORM_FIELD_COUNT",
    "FORM_KIND_FOOD",
    "FORM_KIND_SUBSCRIPTION",
    "FORM_SCREENS",
    "LOCAL_TOKEN",
    "MAX_CHECKOUT_DELAY_SECONDS",
    "MAX_REQUEST_TIMEOUT_SECONDS",
    "MENU_CHOICES",
    "MENU_TARGETS",
    "SCREEN_ACADEMICS",
    "SCREEN_ACADEMICS_SYNCING",
    "SCREEN_FOOD_CHECKOUT",
    "SCREEN_FOOD_CHECKOUT_PROCESSING",
    "SCREEN_FOOD_FORM",
    "SCREEN_FOOD_LIST",
    "SCREEN_FOOD_RECIPE",
    "SCREEN_MENU",
    "SCREEN_SUBSCRIPTIONS",
    "SCREEN_SUBSCRIPTION_FORM",
    "SUBSCRIPTION_FORM_PLACEHOLDERS",
    "Category",
    "FoodItem",
    "FormField",
    "FormState",
    "Session",
    "StudyItem",
    "SubscriptionItem",
    "UserConfig",
]
