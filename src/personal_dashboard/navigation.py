"""Screen state machine: a pure reducer from (session, event) to a transition.

Events are key presses or task results. The reducer never mutates the
session it is given and never performs I/O; it returns the next session,
at most one task for the runtime to dispatch, and a quit flag.

While ``food_checkout_processing`` or ``academics_syncing`` is active every
key press is ignored; only task results move the machine on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from personal_dashboard.action_messages import (
    RECIPE_PENDING_TEXT,
    STATUS_FETCHING,
    STATUS_SYNCING_ACADEMICS,
)
from personal_dashboard.coordinator import (
    adjust_cart,
    apply_failure,
    apply_fetch,
    apply_scrape,
    apply_sync_success,
    complete_checkout,
    delete_at_cursor,
    recipe_ingredients,
    save_food_item,
    save_subscription_item,
    toggle_cart,
)
from personal_dashboard.cursor import CURSOR_DOWN, CURSOR_UP, move_cursor
from personal_dashboard.fixtures import FixtureSet
from personal_dashboard.forms import (
    build_food_item,
    build_subscription_item,
    delete_character,
    focus_next,
    focus_previous,
    is_last_field,
    is_on_selector,
    open_form,
    step_cycle,
    type_character,
)
from personal_dashboard.models import (
    BLOCKING_SCREENS,
    FORM_KIND_FOOD,
    FORM_KIND_SUBSCRIPTION,
    FORM_SCREENS,
    MENU_TARGETS,
    SCREEN_ACADEMICS,
    SCREEN_ACADEMICS_SYNCING,
    SCREEN_FOOD_CHECKOUT,
    SCREEN_FOOD_CHECKOUT_PROCESSING,
    SCREEN_FOOD_FORM,
    SCREEN_FOOD_LIST,
    SCREEN_FOOD_RECIPE,
    SCREEN_MENU,
    SCREEN_SUBSCRIPTION_FORM,
    SCREEN_SUBSCRIPTIONS,
    Session,
)
from personal_dashboard.tasks import (
    CheckoutResult,
    CheckoutTask,
    FetchCategoriesTask,
    FetchResult,
    GenerateRecipeTask,
    RecipeResult,
    ScrapeAcademicsTask,
    ScrapeResult,
    SyncResult,
    Task,
    TaskFailed,
    TaskResult,
)

logger = logging.getLogger(__name__)

# Key names as delivered by the terminal layer.
KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_ENTER = "enter"
KEY_ESCAPE = "escape"
KEY_BACKSPACE = "backspace"
KEY_TAB = "tab"
KEY_SHIFT_TAB = "shift+tab"
KEY_SPACE = "space"
KEY_PLUS = "plus"
KEY_MINUS = "minus"

_BACK_TARGETS = {
    SCREEN_FOOD_RECIPE: SCREEN_FOOD_LIST,
    SCREEN_FOOD_CHECKOUT: SCREEN_FOOD_LIST,
    SCREEN_FOOD_CHECKOUT_PROCESSING: SCREEN_FOOD_LIST,
    SCREEN_FOOD_FORM: SCREEN_FOOD_LIST,
    SCREEN_SUBSCRIPTION_FORM: SCREEN_SUBSCRIPTIONS,
    SCREEN_ACADEMICS_SYNCING: SCREEN_ACADEMICS,
}

_FORM_SCREEN_FOR_KIND = {
    FORM_KIND_FOOD: SCREEN_FOOD_FORM,
    FORM_KIND_SUBSCRIPTION: SCREEN_SUBSCRIPTION_FORM,
}


@dataclass(slots=True)
class KeyPress:
    """A key event: ``key`` is the key name, ``character`` the printable text if any."""

    key: str
    character: str | None = None

    @classmethod
    def char(cls, character: str) -> KeyPress:
        return cls(key=character, character=character)


@dataclass(slots=True)
class Transition:
    session: Session
    task: Task | None = None
    quit: bool = False


Event = KeyPress | TaskResult


def initial_session(token: str, fixtures: FixtureSet | None = None) -> Session:
    """Build the start-up session, seeded from ``fixtures`` when given."""
    if fixtures is None:
        return Session(token=token, status=STATUS_FETCHING)
    return Session(
        token=token,
        food=list(fixtures.food),
        subscriptions=list(fixtures.subscriptions),
        study=list(fixtures.study),
    )


def start(token: str, fixtures: FixtureSet | None = None) -> Transition:
    """Return the opening transition; remote sessions begin with a fetch."""
    session = initial_session(token, fixtures)
    if fixtures is not None:
        return Transition(session)
    return Transition(session, task=FetchCategoriesTask(token=token))


def enter_screen(session: Session, screen: str) -> Session:
    """Switch screens; entering any screen puts the cursor back at 0."""
    form = session.form if screen in FORM_SCREENS else None
    return replace(session, screen=screen, cursor=0, form=form)


def go_back(session: Session) -> Session:
    if session.screen == SCREEN_MENU:
        return replace(session, cursor=0)
    return enter_screen(session, _BACK_TARGETS.get(session.screen, SCREEN_MENU))


# ── Key handling ────────────────────────────────────────────────────────────


def _open_form_screen(session: Session, kind: str, edit_index: int | None) -> Session:
    items = session.food if kind == FORM_KIND_FOOD else session.subscriptions
    form = open_form(kind, items, edit_index)
    return replace(session, screen=_FORM_SCREEN_FOR_KIND[kind], cursor=0, form=form)


def _save_form(session: Session) -> Transition:
    form = session.form
    if form is None:
        return Transition(session)
    if form.kind == FORM_KIND_FOOD:
        item = build_food_item(form)
        if item is None:
            return Transition(session)
        session, task = save_food_item(session, item, form.edit_index)
    else:
        item = build_subscription_item(form)
        if item is None:
            return Transition(session)
        session, task = save_subscription_item(session, item, form.edit_index)
    return Transition(go_back(session), task=task)


def _reduce_form_key(session: Session, event: KeyPress) -> Transition:
    form = session.form
    if form is None:
        logger.warning("Form screen %s has no form state", session.screen)
        return Transition(go_back(session))
    key = event.key
    if key == KEY_ESCAPE:
        return Transition(go_back(session))
    if key in (KEY_LEFT, KEY_RIGHT) and is_on_selector(form):
        step = -1 if key == KEY_LEFT else 1
        return Transition(replace(session, form=step_cycle(form, step)))
    if key == KEY_ENTER and is_last_field(form):
        return _save_form(session)
    if key in (KEY_TAB, KEY_DOWN, KEY_ENTER):
        return Transition(replace(session, form=focus_next(form)))
    if key in (KEY_UP, KEY_SHIFT_TAB):
        return Transition(replace(session, form=focus_previous(form)))
    if key == KEY_BACKSPACE:
        return Transition(replace(session, form=delete_character(form)))
    if event.character and event.character.isprintable():
        return Transition(replace(session, form=type_character(form, event.character)))
    return Transition(session)


def _on_menu_enter(session: Session) -> Transition:
    return Transition(enter_screen(session, MENU_TARGETS[session.cursor]))


def _on_checkout_enter(session: Session) -> Transition:
    return Transition(enter_screen(session, SCREEN_FOOD_CHECKOUT_PROCESSING), task=CheckoutTask())


def _on_recipe(session: Session) -> Transition:
    session = replace(
        enter_screen(session, SCREEN_FOOD_RECIPE),
        recipe_text=RECIPE_PENDING_TEXT,
        recipe_pending=True,
    )
    return Transition(session, task=GenerateRecipeTask(ingredients=recipe_ingredients(session.food)))


def _on_add(session: Session) -> Transition:
    kind = FORM_KIND_FOOD if session.screen == SCREEN_FOOD_LIST else FORM_KIND_SUBSCRIPTION
    return Transition(_open_form_screen(session, kind, None))


def _on_edit(session: Session) -> Transition:
    if session.screen == SCREEN_FOOD_LIST:
        kind, items = FORM_KIND_FOOD, session.food
    else:
        kind, items = FORM_KIND_SUBSCRIPTION, session.subscriptions
    if not items:
        return Transition(session)
    return Transition(_open_form_screen(session, kind, session.cursor))


def _on_delete(session: Session) -> Transition:
    session, task = delete_at_cursor(session)
    return Transition(session, task=task)


def _on_scrape(session: Session) -> Transition:
    session = replace(enter_screen(session, SCREEN_ACADEMICS_SYNCING), status=STATUS_SYNCING_ACADEMICS)
    return Transition(session, task=ScrapeAcademicsTask(token=session.token))


KeyHandler = Callable[[Session], Transition]

# Screen-specific bindings; checked before the global ones.
_SCREEN_KEYS: dict[str, dict[str, KeyHandler]] = {
    SCREEN_MENU: {KEY_ENTER: _on_menu_enter},
    SCREEN_FOOD_LIST: {
        "r": _on_recipe,
        "c": lambda s: Transition(enter_screen(s, SCREEN_FOOD_CHECKOUT)),
        "a": _on_add,
        "e": _on_edit,
        "d": _on_delete,
        KEY_RIGHT: lambda s: Transition(adjust_cart(s, 1)),
        KEY_PLUS: lambda s: Transition(adjust_cart(s, 1)),
        KEY_LEFT: lambda s: Transition(adjust_cart(s, -1)),
        KEY_MINUS: lambda s: Transition(adjust_cart(s, -1)),
        KEY_SPACE: lambda s: Transition(toggle_cart(s)),
    },
    SCREEN_SUBSCRIPTIONS: {"a": _on_add, "e": _on_edit, "d": _on_delete},
    SCREEN_ACADEMICS: {"s": _on_scrape},
    SCREEN_FOOD_CHECKOUT: {KEY_ENTER: _on_checkout_enter},
}

_GLOBAL_KEYS: dict[str, KeyHandler] = {
    "q": lambda s: Transition(s, quit=True),
    KEY_ESCAPE: lambda s: Transition(go_back(s)),
    KEY_BACKSPACE: lambda s: Transition(go_back(s)),
    KEY_UP: lambda s: Transition(move_cursor(s, CURSOR_UP)),
    "k": lambda s: Transition(move_cursor(s, CURSOR_UP)),
    KEY_DOWN: lambda s: Transition(move_cursor(s, CURSOR_DOWN)),
    "j": lambda s: Transition(move_cursor(s, CURSOR_DOWN)),
}


def _reduce_key(session: Session, event: KeyPress) -> Transition:
    if session.screen in BLOCKING_SCREENS:
        return Transition(session)
    if session.screen in FORM_SCREENS:
        return _reduce_form_key(session, event)
    handler = _SCREEN_KEYS.get(session.screen, {}).get(event.key) or _GLOBAL_KEYS.get(event.key)
    if handler is None:
        return Transition(session)
    return handler(session)


# ── Task results ────────────────────────────────────────────────────────────


def _on_fetch(session: Session, result: FetchResult) -> Transition:
    return Transition(apply_fetch(session, result.categories))


def _on_sync(session: Session, result: SyncResult) -> Transition:
    session, task = apply_sync_success(session)
    return Transition(session, task=task)


def _on_recipe_ready(session: Session, result: RecipeResult) -> Transition:
    return Transition(replace(session, recipe_text=result.text, recipe_pending=False))


def _on_scrape_done(session: Session, result: ScrapeResult) -> Transition:
    session, task = apply_scrape(session, result.items)
    return Transition(enter_screen(session, SCREEN_ACADEMICS), task=task)


def _on_checkout_done(session: Session, result: CheckoutResult) -> Transition:
    session, task = complete_checkout(session)
    return Transition(enter_screen(session, SCREEN_FOOD_LIST), task=task)


def _on_failure(session: Session, result: TaskFailed) -> Transition:
    return Transition(apply_failure(session, result))


_RESULT_HANDLERS: dict[str, Callable[[Session, TaskResult], Transition]] = {
    FetchResult.kind: _on_fetch,
    SyncResult.kind: _on_sync,
    RecipeResult.kind: _on_recipe_ready,
    ScrapeResult.kind: _on_scrape_done,
    CheckoutResult.kind: _on_checkout_done,
    TaskFailed.kind: _on_failure,
}


def reduce(session: Session, event: Event) -> Transition:
    """Apply one event to ``session`` and return the resulting transition."""
    if isinstance(event, KeyPress):
        return _reduce_key(session, event)
    return _RESULT_HANDLERS[event.kind](session, event)


__all__ = [
    "Event",
    "KEY_BACKSPACE",
    "KEY_DOWN",
    "KEY_ENTER",
    "KEY_ESCAPE",
    "KEY_LEFT",
    "KEY_MINUS",
    "KEY_PLUS",
    "KEY_RIGHT",
    "KEY_SHIFT_TAB",
    "KEY_SPACE",
    "KEY_TAB",
    "KEY_UP",
    "KeyPress",
    "Transition",
    "enter_screen",
    "go_back",
    "initial_session",
    "reduce",
    "start",
]
