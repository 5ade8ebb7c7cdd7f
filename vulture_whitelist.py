"""Vulture whitelist for Textual framework false positives.

Textual dispatches lifecycle hooks and message handlers by name, and
reads class-level configuration attributes directly. Vulture can't trace
these, so we declare them here.
"""

# ── DashboardApp (App) ────────────────────────────────────────────────
from personal_dashboard.app import DashboardApp, DashboardScreen, TaskCompleted

DashboardApp.TITLE
DashboardApp.CSS
DashboardApp.BINDINGS
DashboardApp.ENABLE_COMMAND_PALETTE
DashboardApp.get_default_screen
DashboardApp.compose
DashboardApp.on_mount
DashboardApp.on_unmount
DashboardApp.on_key
DashboardApp.on_task_completed

# ── Screens and messages ──────────────────────────────────────────────
DashboardScreen
TaskCompleted.result

# ── Protocol members implemented structurally ─────────────────────────
from personal_dashboard.services.local_store import InMemoryRemoteStore

InMemoryRemoteStore.process_checkout
InMemoryRemoteStore.payloads
