"""Tests for the add/edit form controller."""

from __future__ import annotations

import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from personal_dashboard.forms import (
    CYCLE_SELECTOR_INDEX,
    build_food_item,
    build_subscription_item,
    delete_character,
    focus_next,
    focus_previous,
    is_last_field,
    is_on_selector,
    move_focus,
    open_form,
    parse_count,
    parse_price,
    step_cycle,
    type_character,
)
from personal_dashboard.models import (
    CYCLE_CHOICES,
    FOOD_FORM_PLACEHOLDERS,
    FORM_CHAR_LIMIT,
    FORM_FIELD_COUNT,
    FORM_KIND_FOOD,
    FORM_KIND_SUBSCRIPTION,
    SUBSCRIPTION_FORM_PLACEHOLDERS,
    FormState,
)

settings.register_profile("ci", max_examples=50, deadline=None)
settings.load_profile("ci")


def _typed(form: FormState, text: str) -> FormState:
    for ch in text:
        form = type_character(form, ch)
    return form


def _fill(form: FormState, values: list[str]) -> FormState:
    for value in values:
        form = focus_next(_typed(form, value))
    return form


class TestOpenForm:
    def test_new_food_form_has_four_empty_fields(self) -> None:
        form = open_form(FORM_KIND_FOOD)
        assert [f.placeholder for f in form.fields] == list(FOOD_FORM_PLACEHOLDERS)
        assert all(f.value == "" for f in form.fields)
        assert form.focus == 0
        assert form.fields[0].focused
        assert not form.is_edit

    def test_new_subscription_form_has_three_text_fields(self) -> None:
        form = open_form(FORM_KIND_SUBSCRIPTION)
        assert [f.placeholder for f in form.fields] == list(SUBSCRIPTION_FORM_PLACEHOLDERS)
        assert form.cycle_index == 0

    def test_edit_prefills_food_values(self, make_food) -> None:
        items = [make_food("Bread", price=2.5, amount=3, renew_threshold=1)]
        form = open_form(FORM_KIND_FOOD, items, 0)
        assert [f.value for f in form.fields] == ["Bread", "2.50", "3", "1"]
        assert form.edit_index == 0

    def test_edit_preselects_matching_cycle(self, make_subscription) -> None:
        form = open_form(FORM_KIND_SUBSCRIPTION, [make_subscription(cycle="Yearly")], 0)
        assert form.cycle_index == CYCLE_CHOICES.index("Yearly")

    def test_unknown_cycle_falls_back_to_first_choice(self, make_subscription) -> None:
        form = open_form(FORM_KIND_SUBSCRIPTION, [make_subscription(cycle="Weekly")], 0)
        assert form.cycle_index == 0

    def test_out_of_range_edit_index_opens_new_form(self, make_food) -> None:
        form = open_form(FORM_KIND_FOOD, [make_food()], 5)
        assert form.edit_index is None
        assert form.fields[0].value == ""

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown form kind"):
            open_form("recipe")


class TestFocus:
    def test_focus_wraps_forward_from_last_field(self) -> None:
        form = move_focus(open_form(FORM_KIND_FOOD), 3)
        assert form.focus == 3
        assert focus_next(form).focus == 0

    def test_focus_wraps_backward_from_first_field(self) -> None:
        assert focus_previous(open_form(FORM_KIND_FOOD)).focus == 3

    def test_only_focused_field_is_flagged(self) -> None:
        form = focus_next(open_form(FORM_KIND_FOOD))
        assert [f.focused for f in form.fields] == [False, True, False, False]

    def test_subscription_selector_has_no_text_field_focused(self) -> None:
        form = move_focus(open_form(FORM_KIND_SUBSCRIPTION), CYCLE_SELECTOR_INDEX)
        assert is_on_selector(form)
        assert is_last_field(form)
        assert not any(f.focused for f in form.fields)

    def test_food_last_field_is_not_a_selector(self) -> None:
        form = move_focus(open_form(FORM_KIND_FOOD), 3)
        assert is_last_field(form)
        assert not is_on_selector(form)


class TestCycleSelector:
    def test_clamps_at_first_choice(self) -> None:
        form = move_focus(open_form(FORM_KIND_SUBSCRIPTION), CYCLE_SELECTOR_INDEX)
        assert step_cycle(form, -1).cycle_index == 0

    def test_clamps_at_last_choice(self) -> None:
        form = move_focus(open_form(FORM_KIND_SUBSCRIPTION), CYCLE_SELECTOR_INDEX)
        for _ in range(5):
            form = step_cycle(form, 1)
        assert form.cycle_index == len(CYCLE_CHOICES) - 1

    def test_ignored_when_selector_not_focused(self) -> None:
        form = open_form(FORM_KIND_SUBSCRIPTION)
        assert step_cycle(form, 1).cycle_index == 0


class TestTyping:
    def test_types_into_focused_field_only(self) -> None:
        form = _typed(focus_next(open_form(FORM_KIND_FOOD)), "3.5")
        assert [f.value for f in form.fields] == ["", "3.5", "", ""]

    def test_backspace_removes_last_character(self) -> None:
        form = delete_character(_typed(open_form(FORM_KIND_FOOD), "Milk"))
        assert form.fields[0].value == "Mil"

    def test_backspace_on_empty_field_is_noop(self) -> None:
        form = open_form(FORM_KIND_FOOD)
        assert delete_character(form) is form

    def test_character_limit(self) -> None:
        form = _typed(open_form(FORM_KIND_FOOD), "x" * (FORM_CHAR_LIMIT + 10))
        assert len(form.fields[0].value) == FORM_CHAR_LIMIT

    def test_typing_on_selector_is_ignored(self) -> None:
        form = move_focus(open_form(FORM_KIND_SUBSCRIPTION), CYCLE_SELECTOR_INDEX)
        assert type_character(form, "z") is form

    def test_typing_does_not_mutate_original(self) -> None:
        form = open_form(FORM_KIND_FOOD)
        _typed(form, "abc")
        assert form.fields[0].value == ""


class TestParsing:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("2.50", 2.5), (" 4 ", 4.0), ("abc", 0.0), ("", 0.0), ("-3", 0.0), ("nan", 0.0)],
    )
    def test_parse_price(self, text: str, expected: float) -> None:
        assert parse_price(text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"), [("7", 7), ("x", 0), ("", 0), ("-2", 0), ("1.5", 0)]
    )
    def test_parse_count(self, text: str, expected: int) -> None:
        assert parse_count(text) == expected


class TestBuildItems:
    def test_empty_name_builds_nothing(self) -> None:
        form = _fill(open_form(FORM_KIND_FOOD), ["   ", "1", "2", "3"])
        assert build_food_item(form) is None

    def test_food_item_with_bad_numbers_coerces_to_zero(self) -> None:
        form = _fill(open_form(FORM_KIND_FOOD), ["Milk", "cheap", "lots", ""])
        item = build_food_item(form)
        assert item is not None
        assert (item.name, item.price, item.amount, item.renew_threshold) == ("Milk", 0.0, 0, 0)

    def test_subscription_blank_date_becomes_tbd(self) -> None:
        form = _fill(open_form(FORM_KIND_SUBSCRIPTION), ["Gym", "30", ""])
        form = step_cycle(form, 1)
        item = build_subscription_item(form)
        assert item is not None
        assert item.due_date == "TBD"
        assert item.cycle == CYCLE_CHOICES[1]


@given(steps=st.lists(st.sampled_from([1, -1]), max_size=40))
def test_focus_always_within_field_count(steps: list[int]) -> None:
    form = open_form(FORM_KIND_SUBSCRIPTION)
    for step in steps:
        form = move_focus(form, step)
        assert 0 <= form.focus < FORM_FIELD_COUNT
    assert form.focus == sum(steps) % FORM_FIELD_COUNT


@given(steps=st.lists(st.sampled_from([1, -1]), max_size=40))
def test_cycle_index_always_within_choices(steps: list[int]) -> None:
    form = move_focus(open_form(FORM_KIND_SUBSCRIPTION), CYCLE_SELECTOR_INDEX)
    for step in steps:
        form = step_cycle(form, step)
        assert 0 <= form.cycle_index < len(CYCLE_CHOICES)
