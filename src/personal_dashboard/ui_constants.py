"""Internal UI constants for the DashboardApp."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_CSS = """
Screen {
    background: $background;
}

#dashboard-view {
    padding: 1 2;
    width: 100%;
}
"""

# Everything else is routed through the navigation reducer by on_key.
APP_BINDINGS: list[BindingType] = [
    Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
]

__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
]
