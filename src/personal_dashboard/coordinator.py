"""Optimistic mutations and the sync tasks that follow them.

Every structural edit (create, replace, delete) is applied to a fresh copy
of the collection first and then yields exactly one :class:`SyncCategoryTask`
carrying the whole collection. Cart changes are local-only and never sync.
Remote failures are not rolled back: the local copy stays authoritative.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from personal_dashboard.action_messages import (
    STATUS_FETCHING,
    STATUS_LOADED,
    STATUS_ORDER_PLACED,
    STATUS_SAVED,
    STATUS_SCRAPE_COMPLETE,
    STATUS_SYNCING,
    STATUS_SYNCING_DELETION,
    SYNC_PENDING_STATUSES,
    build_auto_renew_status,
    build_error_status,
    build_recipe_error_text,
)
from personal_dashboard.cursor import reclamp
from personal_dashboard.models import (
    AUTO_RENEW_RESTOCK_QTY,
    CATEGORY_ACADEMICS,
    CATEGORY_FOOD,
    CATEGORY_SUBSCRIPTIONS,
    DELIVERY_FEES,
    SCREEN_FOOD_LIST,
    SCREEN_SUBSCRIPTIONS,
    Category,
    FoodItem,
    Session,
    StudyItem,
    SubscriptionItem,
)
from personal_dashboard.tasks import (
    TASK_RECIPE,
    FetchCategoriesTask,
    SyncCategoryTask,
    TaskFailed,
)

logger = logging.getLogger(__name__)

_COLLECTION_ATTRS = {
    CATEGORY_FOOD: "food",
    CATEGORY_SUBSCRIPTIONS: "subscriptions",
    CATEGORY_ACADEMICS: "study",
}

_SCREEN_CATEGORIES = {
    SCREEN_FOOD_LIST: CATEGORY_FOOD,
    SCREEN_SUBSCRIPTIONS: CATEGORY_SUBSCRIPTIONS,
}


def sync_task_for(session: Session, category: str) -> SyncCategoryTask:
    """Build the sync task uploading ``category``'s current collection."""
    items = list(getattr(session, _COLLECTION_ATTRS[category]))
    return SyncCategoryTask(
        token=session.token,
        category=category,
        category_id=session.category_ids.get(category, ""),
        items=items,
    )


# ── Structural edits ────────────────────────────────────────────────────────


def apply_auto_renew(item: FoodItem) -> tuple[FoodItem, bool]:
    """Top the stock up once when it sits at or below the renew threshold."""
    if item.renew_threshold > 0 and item.amount <= item.renew_threshold:
        return replace(item, amount=item.amount + AUTO_RENEW_RESTOCK_QTY), True
    return item, False


def save_food_item(
    session: Session, item: FoodItem, edit_index: int | None = None
) -> tuple[Session, SyncCategoryTask]:
    """Create or replace a food item and return the sync for the food list."""
    item, renewed = apply_auto_renew(item)
    food = list(session.food)
    if edit_index is not None and 0 <= edit_index < len(food):
        food[edit_index] = replace(item, cart_qty=food[edit_index].cart_qty)
    else:
        food.append(replace(item, cart_qty=0))
    status = build_auto_renew_status(item.name) if renewed else STATUS_SYNCING
    if renewed:
        logger.debug("Auto-renew restocked %s to %d", item.name, item.amount)
    session = replace(session, food=food, status=status)
    return session, sync_task_for(session, CATEGORY_FOOD)


def save_subscription_item(
    session: Session, item: SubscriptionItem, edit_index: int | None = None
) -> tuple[Session, SyncCategoryTask]:
    """Create or replace a subscription and return the sync for the list."""
    subscriptions = list(session.subscriptions)
    if edit_index is not None and 0 <= edit_index < len(subscriptions):
        subscriptions[edit_index] = item
    else:
        subscriptions.append(item)
    session = replace(session, subscriptions=subscriptions, status=STATUS_SYNCING)
    return session, sync_task_for(session, CATEGORY_SUBSCRIPTIONS)


def delete_at_cursor(session: Session) -> tuple[Session, SyncCategoryTask | None]:
    """Remove the item under the cursor on the food or subscription list.

    Nothing happens (and no task is issued) on other screens or empty lists.
    """
    category = _SCREEN_CATEGORIES.get(session.screen)
    if category is None:
        return session, None
    attr = _COLLECTION_ATTRS[category]
    items = list(getattr(session, attr))
    if not 0 <= session.cursor < len(items):
        return session, None
    del items[session.cursor]
    session = reclamp(replace(session, **{attr: items}, status=STATUS_SYNCING_DELETION))
    return session, sync_task_for(session, category)


# ── Cart ────────────────────────────────────────────────────────────────────


def _with_cart_qty(session: Session, quantity_for) -> Session:
    if not 0 <= session.cursor < len(session.food):
        return session
    food = list(session.food)
    current = food[session.cursor]
    quantity = max(quantity_for(current.cart_qty), 0)
    if quantity == current.cart_qty:
        return session
    food[session.cursor] = replace(current, cart_qty=quantity)
    return replace(session, food=food)


def adjust_cart(session: Session, delta: int) -> Session:
    """Change the cart quantity of the item under the cursor, floored at 0."""
    return _with_cart_qty(session, lambda qty: qty + delta)


def toggle_cart(session: Session) -> Session:
    """Flip the cart quantity of the item under the cursor between 0 and 1."""
    return _with_cart_qty(session, lambda qty: 0 if qty else 1)


def recipe_ingredients(food: Sequence[FoodItem]) -> list[str]:
    return [item.name for item in food if item.cart_qty > 0]


# ── Checkout ────────────────────────────────────────────────────────────────


def cart_subtotal(food: Sequence[FoodItem]) -> float:
    return sum(item.price * item.cart_qty for item in food if item.cart_qty > 0)


def checkout_total(food: Sequence[FoodItem], delivery_index: int) -> float:
    """Subtotal plus the fee for the chosen delivery option."""
    fee = DELIVERY_FEES[delivery_index] if 0 <= delivery_index < len(DELIVERY_FEES) else 0.0
    return cart_subtotal(food) + fee


def complete_checkout(session: Session) -> tuple[Session, SyncCategoryTask]:
    """Fold every cart quantity into stock and drain the cart."""
    food = [
        replace(item, amount=item.amount + item.cart_qty, cart_qty=0) if item.cart_qty else item
        for item in session.food
    ]
    session = replace(session, food=food, status=STATUS_ORDER_PLACED)
    return session, sync_task_for(session, CATEGORY_FOOD)


# ── Results ─────────────────────────────────────────────────────────────────


def _merge_cart(previous: Sequence[FoodItem], fresh: Sequence[FoodItem]) -> list[FoodItem]:
    """Carry cart quantities over by position where the name is unchanged."""
    merged = []
    for index, item in enumerate(fresh):
        if index < len(previous) and previous[index].name == item.name:
            item = replace(item, cart_qty=previous[index].cart_qty)
        merged.append(item)
    return merged


def apply_fetch(session: Session, categories: Sequence[Category]) -> Session:
    """Adopt the server copy of every returned category."""
    category_ids = dict(session.category_ids)
    updates: dict[str, list] = {}
    for category in categories:
        attr = _COLLECTION_ATTRS.get(category.name)
        if attr is None:
            logger.debug("Ignoring unknown category %r", category.name)
            continue
        category_ids[category.name] = category.id
        items = list(category.items)
        if attr == "food":
            items = _merge_cart(session.food, items)
        updates[attr] = items
    status = STATUS_LOADED if session.status == STATUS_FETCHING else session.status
    return reclamp(replace(session, category_ids=category_ids, status=status, **updates))


def apply_sync_success(session: Session) -> tuple[Session, FetchCategoriesTask]:
    """Confirm a pending sync and refetch to learn server-assigned ids."""
    if session.status in SYNC_PENDING_STATUSES:
        session = replace(session, status=STATUS_SAVED)
    return session, FetchCategoriesTask(token=session.token)


def apply_scrape(
    session: Session, items: Sequence[StudyItem]
) -> tuple[Session, FetchCategoriesTask]:
    """Replace the study list with scraped items; the scraper stores them itself."""
    session = replace(session, study=list(items), status=STATUS_SCRAPE_COMPLETE)
    return session, FetchCategoriesTask(token=session.token)


def apply_failure(session: Session, failure: TaskFailed) -> Session:
    """Surface a remote failure without touching screen or data."""
    session = replace(session, status=build_error_status(failure.error))
    if failure.source == TASK_RECIPE:
        session = replace(
            session,
            recipe_text=build_recipe_error_text(failure.error),
            recipe_pending=False,
        )
    return session


__all__ = [
    "adjust_cart",
    "apply_auto_renew",
    "apply_failure",
    "apply_fetch",
    "apply_scrape",
    "apply_sync_success",
    "cart_subtotal",
    "checkout_total",
    "complete_checkout",
    "delete_at_cursor",
    "recipe_ingredients",
    "save_food_item",
    "save_subscription_item",
    "sync_task_for",
    "toggle_cart",
]
