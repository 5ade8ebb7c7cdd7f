"""UI-facing copy builders for status lines and start-up errors."""

from __future__ import annotations

from personal_dashboard.models import AUTO_RENEW_RESTOCK_QTY

STATUS_FETCHING = "Fetching data..."
STATUS_LOADED = "Data loaded successfully."
STATUS_SYNCING = "Syncing..."
STATUS_SYNCING_DELETION = "Syncing deletion..."
STATUS_SYNCING_ACADEMICS = "Syncing Canvas data..."
STATUS_SAVED = "Saved securely to database ✓"
STATUS_ORDER_PLACED = "Order placed! Stock updated in database 🚚"
STATUS_SCRAPE_COMPLETE = "Canvas sync complete! ✅"

# Status lines that a successful sync is allowed to overwrite.
SYNC_PENDING_STATUSES = frozenset(
    {STATUS_SYNCING, STATUS_SYNCING_DELETION, STATUS_SYNCING_ACADEMICS}
)

RECIPE_PENDING_TEXT = "⏳ Connecting to API and generating recipe..."


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_error_status(error: str) -> str:
    """Build the status line for a failed background operation."""
    return f"Error: {error}"


def build_recipe_error_text(error: str) -> str:
    """Build the text shown in place of a recipe that could not be generated."""
    return f"Server Error: {error}"


def build_auto_renew_status(name: str) -> str:
    """Build the status line announcing an automatic restock."""
    return f"Auto-renew triggered! +{AUTO_RENEW_RESTOCK_QTY} {name} bought 🚚"


__all__ = [
    "RECIPE_PENDING_TEXT",
    "STATUS_FETCHING",
    "STATUS_LOADED",
    "STATUS_ORDER_PLACED",
    "STATUS_SAVED",
    "STATUS_SCRAPE_COMPLETE",
    "STATUS_SYNCING",
    "STATUS_SYNCING_ACADEMICS",
    "STATUS_SYNCING_DELETION",
    "SYNC_PENDING_STATUSES",
    "build_actionable_error",
    "build_auto_renew_status",
    "build_error_status",
    "build_next_step_hint",
    "build_recipe_error_text",
]
