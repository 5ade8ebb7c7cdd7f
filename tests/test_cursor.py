"""Tests for the list cursor model."""

from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import given, settings

from personal_dashboard.cursor import (
    CURSOR_DOWN,
    CURSOR_UP,
    clamp_cursor,
    collection_for,
    move_cursor,
    reclamp,
)
from personal_dashboard.models import (
    DELIVERY_CHOICES,
    MENU_CHOICES,
    SCREEN_ACADEMICS,
    SCREEN_FOOD_CHECKOUT,
    SCREEN_FOOD_FORM,
    SCREEN_FOOD_LIST,
    SCREEN_FOOD_RECIPE,
    SCREEN_MENU,
    SCREEN_SUBSCRIPTIONS,
    FoodItem,
    Session,
)

settings.register_profile("ci", max_examples=50, deadline=None)
settings.load_profile("ci")


class TestCollectionFor:
    def test_menu_and_checkout_use_static_choices(self, make_session) -> None:
        session = make_session()
        assert collection_for(session, SCREEN_MENU) == MENU_CHOICES
        assert collection_for(session, SCREEN_FOOD_CHECKOUT) == DELIVERY_CHOICES

    def test_list_screens_map_to_their_collections(
        self, make_session, make_food, make_subscription, make_study
    ) -> None:
        session = make_session(
            food=[make_food()], subscriptions=[make_subscription()], study=[make_study()]
        )
        assert collection_for(session, SCREEN_FOOD_LIST) is session.food
        assert collection_for(session, SCREEN_SUBSCRIPTIONS) is session.subscriptions
        assert collection_for(session, SCREEN_ACADEMICS) is session.study

    def test_screens_without_a_list_are_empty(self, make_session) -> None:
        session = make_session()
        assert collection_for(session, SCREEN_FOOD_RECIPE) == ()
        assert collection_for(session, SCREEN_FOOD_FORM) == ()

    def test_defaults_to_current_screen(self, make_session) -> None:
        assert collection_for(make_session(screen=SCREEN_MENU)) == MENU_CHOICES


class TestClampCursor:
    def test_up_stops_at_zero(self) -> None:
        assert clamp_cursor(3, 0, CURSOR_UP) == 0

    def test_down_stops_at_last_index(self) -> None:
        assert clamp_cursor(3, 2, CURSOR_DOWN) == 2

    def test_empty_collection_pins_to_zero(self) -> None:
        assert clamp_cursor(0, 0, CURSOR_DOWN) == 0
        assert clamp_cursor(0, 5) == 0

    def test_zero_direction_only_reclamps(self) -> None:
        assert clamp_cursor(2, 7) == 1
        assert clamp_cursor(5, 3) == 3


class TestMoveCursor:
    def test_menu_walks_three_entries(self, make_session) -> None:
        session = make_session(screen=SCREEN_MENU)
        for _ in range(5):
            session = move_cursor(session, CURSOR_DOWN)
        assert session.cursor == len(MENU_CHOICES) - 1

    def test_does_not_mutate_input(self, make_session, make_food) -> None:
        session = make_session(screen=SCREEN_FOOD_LIST, food=[make_food(), make_food("Eggs")])
        moved = move_cursor(session, CURSOR_DOWN)
        assert moved.cursor == 1
        assert session.cursor == 0

    def test_reclamp_after_shrink(self, make_session, make_food) -> None:
        session = make_session(screen=SCREEN_FOOD_LIST, cursor=4, food=[make_food()])
        assert reclamp(session).cursor == 0


@given(
    length=st.integers(min_value=0, max_value=20),
    moves=st.lists(st.sampled_from([CURSOR_UP, CURSOR_DOWN]), max_size=60),
)
def test_cursor_stays_in_bounds_for_any_move_sequence(length: int, moves: list[int]) -> None:
    session = Session(
        token="t",
        screen=SCREEN_FOOD_LIST,
        food=[FoodItem(name=f"item-{i}") for i in range(length)],
    )
    for direction in moves:
        session = move_cursor(session, direction)
        assert 0 <= session.cursor <= max(length - 1, 0)
