"""Wire format for remote categories: encode collections, decode responses.

Decoding contract. The decoders accept any JSON-shaped input:

  Input problem                        Result
  ───────────────────────────────────  ────────────────────────────────
  payload is not a list                no categories
  category entry is not a dict         entry skipped
  content is a JSON string             parsed, then treated as an object
  content/items malformed              empty collection
  item entry is not a dict / no name   item skipped
  scalar field has the wrong type      field default
  negative or non-finite number        clamped to 0

Cart quantities are local-only and never appear on the wire.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Sequence
from typing import Any

from personal_dashboard.models import (
    CATEGORY_ACADEMICS,
    CATEGORY_FOOD,
    CATEGORY_SUBSCRIPTIONS,
    CYCLE_CHOICES,
    DEFAULT_DUE_DATE,
    Category,
    FoodItem,
    StudyItem,
    SubscriptionItem,
)

logger = logging.getLogger(__name__)


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if isinstance(value, bool) and expected_type is not bool:
        return default
    if not isinstance(value, expected_type):
        return default
    return value


def _coerce_price(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    value = float(value)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _coerce_count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        return 0
    return max(value, 0)


# ── Encoding ────────────────────────────────────────────────────────────────


def food_item_to_dict(item: FoodItem) -> dict[str, Any]:
    return {
        "name": item.name,
        "price": item.price,
        "amount": item.amount,
        "renewThreshold": item.renew_threshold,
    }


def subscription_item_to_dict(item: SubscriptionItem) -> dict[str, Any]:
    return {
        "name": item.name,
        "price": item.price,
        "dueDate": item.due_date,
        "cycle": item.cycle,
    }


def study_item_to_dict(item: StudyItem) -> dict[str, Any]:
    return {"name": item.name, "dueDate": item.due_date}


_ENCODERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    CATEGORY_FOOD: food_item_to_dict,
    CATEGORY_SUBSCRIPTIONS: subscription_item_to_dict,
    CATEGORY_ACADEMICS: study_item_to_dict,
}


def encode_items(category: str, items: Sequence[Any]) -> list[dict[str, Any]]:
    """Serialize a collection for ``category``."""
    try:
        encoder = _ENCODERS[category]
    except KeyError:
        raise ValueError(f"Unknown category: {category!r}") from None
    return [encoder(item) for item in items]


def encode_category(
    token: str, name: str, category_id: str, items: Sequence[Any]
) -> dict[str, Any]:
    """Build the upsert request body for one category."""
    return {
        "id": category_id,
        "user_id": token,
        "name": name,
        "content": {"items": encode_items(name, items)},
    }


# ── Decoding ────────────────────────────────────────────────────────────────


def food_item_from_dict(data: dict[str, Any]) -> FoodItem | None:
    name = _safe_get(data, "name", "", str)
    if not name:
        return None
    return FoodItem(
        name=name,
        price=_coerce_price(data.get("price")),
        amount=_coerce_count(data.get("amount")),
        renew_threshold=_coerce_count(data.get("renewThreshold")),
    )


def subscription_item_from_dict(data: dict[str, Any]) -> SubscriptionItem | None:
    name = _safe_get(data, "name", "", str)
    if not name:
        return None
    cycle = _safe_get(data, "cycle", CYCLE_CHOICES[0], str)
    return SubscriptionItem(
        name=name,
        price=_coerce_price(data.get("price")),
        due_date=_safe_get(data, "dueDate", DEFAULT_DUE_DATE, str) or DEFAULT_DUE_DATE,
        cycle=cycle,
    )


def study_item_from_dict(data: dict[str, Any]) -> StudyItem | None:
    name = _safe_get(data, "name", "", str)
    if not name:
        return None
    return StudyItem(name=name, due_date=_safe_get(data, "dueDate", "", str))


_DECODERS: dict[str, Callable[[dict[str, Any]], Any]] = {
    CATEGORY_FOOD: food_item_from_dict,
    CATEGORY_SUBSCRIPTIONS: subscription_item_from_dict,
    CATEGORY_ACADEMICS: study_item_from_dict,
}


def decode_items(category: str, raw_items: Any) -> list[Any]:
    """Decode a raw item list for ``category``; unknown categories yield []."""
    decoder = _DECODERS.get(category)
    if decoder is None or not isinstance(raw_items, list):
        return []
    items = []
    for entry in raw_items:
        if not isinstance(entry, dict):
            continue
        item = decoder(entry)
        if item is not None:
            items.append(item)
    return items


def _content_items(content: Any) -> Any:
    """Unwrap ``{"items": [...]}`` content, which may arrive as a JSON string."""
    if isinstance(content, str):
        try:
            content = json.loads(content)
        except json.JSONDecodeError:
            logger.warning("Category content is not valid JSON")
            return []
    if not isinstance(content, dict):
        return []
    return content.get("items", [])


def decode_category(data: Any) -> Category | None:
    """Decode one category entry; None when it has no name."""
    if not isinstance(data, dict):
        return None
    name = _safe_get(data, "name", "", str)
    if not name:
        return None
    return Category(
        id=_safe_get(data, "id", "", str),
        owner_token=_safe_get(data, "user_id", "", str),
        name=name,
        items=decode_items(name, _content_items(data.get("content"))),
    )


def decode_categories(payload: Any) -> list[Category]:
    """Decode the category list returned by a fetch."""
    if not isinstance(payload, list):
        logger.warning("Category payload is %s, expected a list", type(payload).__name__)
        return []
    categories = []
    for entry in payload:
        category = decode_category(entry)
        if category is not None:
            categories.append(category)
    return categories


def decode_study_items(payload: Any) -> list[StudyItem]:
    """Decode a scrape response of the form ``{"items": [...]}``."""
    if not isinstance(payload, dict):
        return []
    return decode_items(CATEGORY_ACADEMICS, payload.get("items"))


__all__ = [
    "decode_categories",
    "decode_category",
    "decode_items",
    "decode_study_items",
    "encode_category",
    "encode_items",
    "food_item_from_dict",
    "food_item_to_dict",
    "study_item_from_dict",
    "study_item_to_dict",
    "subscription_item_from_dict",
    "subscription_item_to_dict",
]
