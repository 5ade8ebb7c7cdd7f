"""Add/edit form controller.

A form has four logical fields. Focus moves over them cyclically (past the
last field wraps to the first and vice versa). The subscription form's fourth
field is a selector over ``CYCLE_CHOICES`` whose value is stepped with
left/right and *clamped* at both ends instead of wrapping.

Numeric input is parsed leniently: anything that does not parse becomes 0.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from personal_dashboard.models import (
    CYCLE_CHOICES,
    DEFAULT_DUE_DATE,
    FOOD_FORM_PLACEHOLDERS,
    FORM_CHAR_LIMIT,
    FORM_FIELD_COUNT,
    FORM_KIND_FOOD,
    FORM_KIND_SUBSCRIPTION,
    SUBSCRIPTION_FORM_PLACEHOLDERS,
    FoodItem,
    FormField,
    FormState,
    SubscriptionItem,
)

logger = logging.getLogger(__name__)

# Logical index of the subscription cycle selector.
CYCLE_SELECTOR_INDEX = len(SUBSCRIPTION_FORM_PLACEHOLDERS)


def _cycle_index_for(cycle: str) -> int:
    """Return the selector index for ``cycle``, 0 when it is not a known choice."""
    try:
        return CYCLE_CHOICES.index(cycle)
    except ValueError:
        return 0


def _food_values(item: FoodItem) -> list[str]:
    return [
        item.name,
        f"{item.price:.2f}",
        str(item.amount),
        str(item.renew_threshold),
    ]


def _subscription_values(item: SubscriptionItem) -> list[str]:
    return [item.name, f"{item.price:.2f}", item.due_date]


def open_form(
    kind: str,
    items: Sequence[Any] = (),
    edit_index: int | None = None,
) -> FormState:
    """Build a fresh form, pre-filled from ``items[edit_index]`` when editing.

    An ``edit_index`` outside ``items`` opens an empty "new item" form.
    """
    if kind == FORM_KIND_FOOD:
        placeholders = FOOD_FORM_PLACEHOLDERS
    elif kind == FORM_KIND_SUBSCRIPTION:
        placeholders = SUBSCRIPTION_FORM_PLACEHOLDERS
    else:
        raise ValueError(f"Unknown form kind: {kind!r}")

    if edit_index is not None and not 0 <= edit_index < len(items):
        logger.debug("Edit index %s out of range for %d items", edit_index, len(items))
        edit_index = None

    values = [""] * len(placeholders)
    cycle_index = 0
    if edit_index is not None:
        item = items[edit_index]
        if kind == FORM_KIND_FOOD:
            values = _food_values(item)
        else:
            values = _subscription_values(item)
            cycle_index = _cycle_index_for(item.cycle)

    fields = [
        FormField(placeholder=placeholder, value=value[:FORM_CHAR_LIMIT], focused=i == 0)
        for i, (placeholder, value) in enumerate(zip(placeholders, values))
    ]
    return FormState(kind=kind, fields=fields, edit_index=edit_index, cycle_index=cycle_index)


def _with_focus(form: FormState, focus: int) -> FormState:
    fields = [replace(f, focused=i == focus) for i, f in enumerate(form.fields)]
    return replace(form, fields=fields, focus=focus)


def move_focus(form: FormState, step: int) -> FormState:
    """Move focus by ``step`` logical fields, wrapping at both ends."""
    return _with_focus(form, (form.focus + step) % FORM_FIELD_COUNT)


def focus_next(form: FormState) -> FormState:
    return move_focus(form, 1)


def focus_previous(form: FormState) -> FormState:
    return move_focus(form, -1)


def is_last_field(form: FormState) -> bool:
    return form.focus == FORM_FIELD_COUNT - 1


def is_on_selector(form: FormState) -> bool:
    """True when the subscription cycle selector holds focus."""
    return form.kind == FORM_KIND_SUBSCRIPTION and form.focus == CYCLE_SELECTOR_INDEX


def step_cycle(form: FormState, step: int) -> FormState:
    """Step the cycle selector, clamped to the available choices."""
    if not is_on_selector(form):
        return form
    index = max(0, min(form.cycle_index + step, len(CYCLE_CHOICES) - 1))
    if index == form.cycle_index:
        return form
    return replace(form, cycle_index=index)


def _focused_text_field(form: FormState) -> int | None:
    if 0 <= form.focus < len(form.fields):
        return form.focus
    return None


def type_character(form: FormState, character: str) -> FormState:
    """Append ``character`` to the focused text field (ignored on the selector)."""
    index = _focused_text_field(form)
    if index is None:
        return form
    current = form.fields[index]
    if len(current.value) + len(character) > FORM_CHAR_LIMIT:
        return form
    fields = list(form.fields)
    fields[index] = replace(current, value=current.value + character)
    return replace(form, fields=fields)


def delete_character(form: FormState) -> FormState:
    """Drop the last character of the focused text field."""
    index = _focused_text_field(form)
    if index is None or not form.fields[index].value:
        return form
    fields = list(form.fields)
    fields[index] = replace(fields[index], value=fields[index].value[:-1])
    return replace(form, fields=fields)


def field_value(form: FormState, index: int) -> str:
    return form.fields[index].value.strip()


def parse_price(text: str) -> float:
    """Parse a price, returning 0.0 for anything unparsable, negative or non-finite."""
    try:
        value = float(text.strip())
    except ValueError:
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def parse_count(text: str) -> int:
    """Parse a whole number, returning 0 for anything unparsable or negative."""
    try:
        value = int(text.strip())
    except ValueError:
        return 0
    return max(value, 0)


def build_food_item(form: FormState) -> FoodItem | None:
    """Build a food item from the form, or None when the name is empty."""
    name = field_value(form, 0)
    if not name:
        return None
    return FoodItem(
        name=name,
        price=parse_price(field_value(form, 1)),
        amount=parse_count(field_value(form, 2)),
        renew_threshold=parse_count(field_value(form, 3)),
    )


def build_subscription_item(form: FormState) -> SubscriptionItem | None:
    """Build a subscription from the form, or None when the name is empty."""
    name = field_value(form, 0)
    if not name:
        return None
    return SubscriptionItem(
        name=name,
        price=parse_price(field_value(form, 1)),
        due_date=field_value(form, 2) or DEFAULT_DUE_DATE,
        cycle=CYCLE_CHOICES[form.cycle_index],
    )


__all__ = [
    "CYCLE_SELECTOR_INDEX",
    "build_food_item",
    "build_subscription_item",
    "delete_character",
    "field_value",
    "focus_next",
    "focus_previous",
    "is_last_field",
    "is_on_selector",
    "move_focus",
    "open_form",
    "parse_count",
    "parse_price",
    "step_cycle",
    "type_character",
]
