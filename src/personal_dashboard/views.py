"""Render a session as Rich markup, one function per screen."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from rich.markup import escape as escape_markup

from personal_dashboard.coordinator import cart_subtotal, checkout_total
from personal_dashboard.forms import CYCLE_SELECTOR_INDEX
from personal_dashboard.models import (
    CYCLE_CHOICES,
    DELIVERY_CHOICES,
    FORM_KIND_SUBSCRIPTION,
    MENU_CHOICES,
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

CURSOR_MARKER = "▶ "
NO_MARKER = "  "

HINT_MENU = "[up/down: Navigate • Enter: Select • q: Quit]"
HINT_FOOD = "[Left/Right: Add Qty • a: Add • e: Edit • d: Del • r: Recipe • c: Checkout]"
HINT_RECIPE = "[Esc: Back]"
HINT_CHECKOUT = "[Enter: Buy • Esc: Cancel]"
HINT_PROCESSING = "[Processing... please do not close]"
HINT_SUBSCRIPTIONS = "[a: Add • e: Edit • d: Delete • up/down: Navigate • Esc: Back]"
HINT_ACADEMICS = "[s: Sync Canvas • up/down: Navigate • Esc: Back]"
HINT_SCRAPING = "[Scraping... please wait]"
HINT_FORM = "[Tab/Up/Down: Next • Left/Right: Select Cycle • Enter: Save]"


def _title(text: str) -> str:
    return f"[bold reverse] {text} [/]"


def _hint(text: str) -> str:
    return f"[dim]{escape_markup(text)}[/]"


def _status(session: Session) -> str:
    return f"[green]{escape_markup(session.status)}[/]"


def _row(text: str, selected: bool) -> str:
    marker = CURSOR_MARKER if selected else NO_MARKER
    line = f"  {marker}{text}"
    return f"[bold green]{line}[/]" if selected else line


def render_list(lines: Sequence[str], cursor: int) -> list[str]:
    """Prefix each pre-escaped line, highlighting the one under the cursor."""
    return [_row(line, i == cursor) for i, line in enumerate(lines)]


def render_menu(session: Session) -> list[str]:
    header = f"🔑 Auth: {session.token} | {session.status}"
    return [
        _title("⚡ PERSONAL DASHBOARD"),
        f"[green]{escape_markup(header)}[/]",
        "",
        *render_list([escape_markup(choice) for choice in MENU_CHOICES], session.cursor),
        "",
        _hint(HINT_MENU),
    ]


def render_food_list(session: Session) -> list[str]:
    lines = [_title("🛒 FOOD - Inventory & Cart")]
    if not session.food:
        lines.append("    No items. Press 'a' to add one.")
    else:
        rows = []
        for item in session.food:
            cart = f"[{item.cart_qty:2d}]" if item.cart_qty > 0 else "[  ]"
            renew = f"[R≤{item.renew_threshold}]" if item.renew_threshold > 0 else ""
            rows.append(
                escape_markup(
                    f"{cart} {item.name:<18} (Stock: {item.amount:2d}) {renew:<7} -  ${item.price:.2f}"
                )
            )
        lines.extend(render_list(rows, session.cursor))
    lines.extend(["", _hint(HINT_FOOD), _status(session)])
    return lines


def render_recipe(session: Session) -> list[str]:
    lines = [_title("🍳 GENERATED RECIPE (API)"), ""]
    text = escape_markup(session.recipe_text)
    if session.recipe_pending:
        lines.append(f"[yellow]{text}[/]")
    else:
        lines.extend([text, "", _hint(HINT_RECIPE)])
    return lines


def render_checkout(session: Session) -> list[str]:
    lines = [_title("🚚 CHECKOUT")]
    in_cart = [item for item in session.food if item.cart_qty > 0]
    if not in_cart:
        lines.append("🛒 Cart empty.")
        lines.append("Go back and press Right Arrow to add items to cart.")
    else:
        lines.append("Items in Cart:")
        for item in in_cart:
            cost = item.price * item.cart_qty
            lines.append(escape_markup(f"  {item.cart_qty}x {item.name:<15} - ${cost:.2f}"))
        lines.extend(["", f"Subtotal: ${cart_subtotal(session.food):.2f}", ""])
        lines.append("Choose delivery:")
        lines.append("")
        lines.extend(render_list([escape_markup(c) for c in DELIVERY_CHOICES], session.cursor))
        total = checkout_total(session.food, session.cursor)
        lines.extend(["", f"💰 TOTAL TO PAY: ${total:.2f}"])
    lines.extend(["", _hint(HINT_CHECKOUT)])
    return lines


def render_processing(session: Session) -> list[str]:
    return [
        _title("🚚 PROCESSING ORDER"),
        "",
        "[yellow]⏳ Please wait, securely placing your order and processing payment...[/]",
        "",
        _hint(HINT_PROCESSING),
    ]


def render_subscriptions(session: Session) -> list[str]:
    lines = [_title("💳 SUBSCRIPTIONS")]
    if not session.subscriptions:
        lines.append("    No items.")
    else:
        rows = [
            escape_markup(
                f"{item.name:<15} | {item.cycle:<10} | ${item.price:.2f} | Due: {item.due_date}"
            )
            for item in session.subscriptions
        ]
        lines.extend(render_list(rows, session.cursor))
    lines.extend(["", _hint(HINT_SUBSCRIPTIONS), _status(session)])
    return lines


def render_academics(session: Session) -> list[str]:
    lines = [_title("📚 ACADEMICS"), ""]
    if not session.study:
        lines.append("    No pending assignments.")
    else:
        rows = [escape_markup(f"{item.name:<35} | {item.due_date}") for item in session.study]
        lines.extend(render_list(rows, session.cursor))
    lines.extend(["", _hint(HINT_ACADEMICS), _status(session)])
    return lines


def render_scraping(session: Session) -> list[str]:
    return [
        _title("📚 ACADEMICS (Automated Scraper)"),
        "",
        "[yellow]⏳ Connecting to Canvas LMS... extracting assignments...[/]",
        "",
        _hint(HINT_SCRAPING),
    ]


def render_form(session: Session) -> list[str]:
    form = session.form
    if form is None:
        return []
    lines = [_title("✏️ EDIT ITEM" if form.is_edit else "➕ ADD NEW ITEM"), ""]
    for form_field in form.fields:
        prompt = "> " if form_field.focused else "  "
        if form_field.value:
            text = escape_markup(form_field.value)
        else:
            text = f"[dim]{escape_markup(form_field.placeholder)}[/]"
        line = f"{prompt}{text}"
        lines.append(f"[green]{line}[/]" if form_field.focused else line)
    if form.kind == FORM_KIND_SUBSCRIPTION:
        on_selector = form.focus == CYCLE_SELECTOR_INDEX
        lines.append("[green]> Cycle:[/]" if on_selector else "  Cycle:")
        radios = [
            f"{'(x)' if i == form.cycle_index else '( )'} {choice}"
            for i, choice in enumerate(CYCLE_CHOICES)
        ]
        lines.append("  " + "   ".join(escape_markup(radio) for radio in radios))
    lines.extend(["", "", _hint(HINT_FORM)])
    return lines


_RENDERERS: dict[str, Callable[[Session], list[str]]] = {
    SCREEN_MENU: render_menu,
    SCREEN_FOOD_LIST: render_food_list,
    SCREEN_FOOD_RECIPE: render_recipe,
    SCREEN_FOOD_CHECKOUT: render_checkout,
    SCREEN_FOOD_CHECKOUT_PROCESSING: render_processing,
    SCREEN_SUBSCRIPTIONS: render_subscriptions,
    SCREEN_ACADEMICS: render_academics,
    SCREEN_ACADEMICS_SYNCING: render_scraping,
    SCREEN_FOOD_FORM: render_form,
    SCREEN_SUBSCRIPTION_FORM: render_form,
}


def render(session: Session) -> str:
    """Render the active screen as a Rich markup string."""
    return "\n".join(_RENDERERS[session.screen](session))


__all__ = [
    "CURSOR_MARKER",
    "render",
    "render_academics",
    "render_checkout",
    "render_food_list",
    "render_form",
    "render_list",
    "render_menu",
    "render_recipe",
    "render_subscriptions",
]
