"""Textual runtime for the personal dashboard.

The app owns the single event loop: every key press and every finished
background task goes through :func:`personal_dashboard.navigation.reduce`,
the returned session replaces the current one, the view is redrawn, and
any returned task is started as a tracked asyncio task whose result is
posted back as a :class:`TaskCompleted` message.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

import httpx
from textual.app import App, ComposeResult
from textual.events import Key
from textual.message import Message
from textual.screen import Screen
from textual.widgets import Static

from personal_dashboard.cli import _configure_logging, _validate_interactive_tty
from personal_dashboard.cli import main as _cli_main
from personal_dashboard.config import load_config
from personal_dashboard.fixtures import FixtureSet
from personal_dashboard.models import UserConfig
from personal_dashboard.navigation import KeyPress, Transition, reduce, start
from personal_dashboard.services.interfaces import AppServices, build_default_app_services
from personal_dashboard.tasks import Task, TaskResult, run_task
from personal_dashboard.ui_constants import APP_BINDINGS, APP_CSS
from personal_dashboard.views import render

logger = logging.getLogger(__name__)


class TaskCompleted(Message):
    """Posted when a background task has produced its result."""

    def __init__(self, result: TaskResult) -> None:
        super().__init__()
        self.result = result


class DashboardScreen(Screen, inherit_bindings=False):
    """Default screen without focus-cycling bindings; tab belongs to the forms."""


class DashboardApp(App):
    """A TUI dashboard for food, subscriptions, and academic deadlines."""

    TITLE = "Personal Dashboard"

    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        token: str,
        config: UserConfig | None = None,
        services: AppServices | None = None,
        fixtures: FixtureSet | None = None,
    ) -> None:
        super().__init__()
        self._config = config or UserConfig()
        self._services: AppServices = services or build_default_app_services(self._config)
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._http_client: httpx.AsyncClient | None = None
        opening = start(token, fixtures)
        self.session = opening.session
        self._opening_task: Task | None = opening.task

    def get_default_screen(self) -> Screen:
        return DashboardScreen()

    def compose(self) -> ComposeResult:
        yield Static(render(self.session), id="dashboard-view")

    def on_mount(self) -> None:
        """Create the shared HTTP client and start the opening fetch, if any."""
        self._http_client = httpx.AsyncClient()
        task = self._opening_task
        self._opening_task = None
        if task is not None:
            self._dispatch(task)
        logger.debug(
            "App mounted: token=%s, local=%s, fetching=%s",
            self.session.token,
            self._services.local,
            task is not None,
        )

    async def on_unmount(self) -> None:
        """Cancel in-flight tasks and close the shared HTTP client."""
        pending = [task for task in self._background_tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            _, still_pending = await asyncio.wait(pending, timeout=0.5)
            for task in still_pending:
                logger.debug("Background task did not cancel before shutdown: %r", task)
        self._background_tasks.clear()

        client = self._http_client
        self._http_client = None
        if client is not None:
            try:
                await client.aclose()
            except (httpx.HTTPError, RuntimeError, OSError) as exc:
                logger.debug("Failed to close HTTP client cleanly: %s", exc)

    def on_key(self, event: Key) -> None:
        event.prevent_default()
        event.stop()
        self._apply(reduce(self.session, KeyPress(key=event.key, character=event.character)))

    def on_task_completed(self, message: TaskCompleted) -> None:
        logger.debug("Task result: %s", message.result.kind)
        self._apply(reduce(self.session, message.result))

    def _apply(self, transition: Transition) -> None:
        self.session = transition.session
        self._refresh_view()
        if transition.task is not None:
            self._dispatch(transition.task)
        if transition.quit:
            self.exit()

    def _refresh_view(self) -> None:
        self.query_one("#dashboard-view", Static).update(render(self.session))

    def _dispatch(self, task: Task) -> None:
        logger.debug("Dispatching %s task", task.kind)
        self._track_task(self._run_and_post(task))

    async def _run_and_post(self, task: Task) -> None:
        result = await run_task(
            task,
            store=self._services.remote_store,
            client=self._http_client,
            checkout_delay_seconds=self._config.checkout_delay_seconds,
        )
        self.post_message(TaskCompleted(result))

    def _track_task(self, coro: Any) -> asyncio.Task[None]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(
        load_config_fn=load_config,
        configure_logging_fn=_configure_logging,
        validate_interactive_tty_fn=_validate_interactive_tty,
        app_factory=DashboardApp,
    )


__all__ = [
    "DashboardApp",
    "DashboardScreen",
    "TaskCompleted",
    "main",
]


if __name__ == "__main__":
    sys.exit(main())
