"""CLI/bootstrap helpers for the personal dashboard."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import math
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from personal_dashboard.action_messages import build_actionable_error
from personal_dashboard.config import CONFIG_APP_NAME, load_config, save_config
from personal_dashboard.fixtures import fixtures_for
from personal_dashboard.models import (
    LOCAL_TOKEN,
    MAX_CHECKOUT_DELAY_SECONDS,
    MAX_REQUEST_TIMEOUT_SECONDS,
    UserConfig,
)
from personal_dashboard.services.interfaces import (
    build_default_app_services,
    build_local_app_services,
)

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (the TUI owns the terminal)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _apply_overrides(args: argparse.Namespace, config: UserConfig) -> str | None:
    """Apply command-line overrides to ``config``; return an error message if invalid."""
    if args.base_url is not None:
        base_url = args.base_url.strip().rstrip("/")
        if not base_url.startswith(("http://", "https://")):
            return build_actionable_error(
                "use the given base URL",
                why=f"{args.base_url!r} is not an http(s) URL",
                next_step="pass --base-url https://host[:port]",
            )
        config.base_url = base_url
    if args.timeout is not None:
        if not 1 <= args.timeout <= MAX_REQUEST_TIMEOUT_SECONDS:
            return build_actionable_error(
                "use the given request timeout",
                why=f"--timeout must be between 1 and {MAX_REQUEST_TIMEOUT_SECONDS} seconds",
                next_step="pass a smaller --timeout value",
            )
        config.request_timeout_seconds = args.timeout
    if args.checkout_delay is not None:
        delay = args.checkout_delay
        if not math.isfinite(delay) or not 0 <= delay <= MAX_CHECKOUT_DELAY_SECONDS:
            return build_actionable_error(
                "use the given checkout delay",
                why=f"--checkout-delay must be between 0 and {MAX_CHECKOUT_DELAY_SECONDS:g} seconds",
                next_step="pass a --checkout-delay within range",
            )
        config.checkout_delay_seconds = delay
    return None


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    save_config_fn: Callable[[UserConfig], bool] = save_config,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    parser = argparse.ArgumentParser(
        description="Track food, subscriptions, and academic deadlines in a TUI"
    )
    parser.add_argument(
        "--token",
        type=str,
        default=None,
        help="Session token identifying your data on the remote store",
    )
    parser.add_argument(
        "--local",
        action="store_true",
        help="Run against an in-memory store seeded with built-in data (no network)",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Remote store base URL (default: config value)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help=f"Request timeout in seconds (1-{MAX_REQUEST_TIMEOUT_SECONDS}; default: config value)",
    )
    parser.add_argument(
        "--checkout-delay",
        type=float,
        default=None,
        help="Simulated payment processing time in seconds (default: config value)",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Persist --base-url/--timeout/--checkout-delay to the config file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/personal-dashboard/debug.log)",
    )
    args = parser.parse_args(argv)

    configure_logging_fn(args.debug)
    logger.debug("personal-dashboard starting, cwd=%s", Path.cwd())

    config = load_config_fn()
    error = _apply_overrides(args, config)
    if error:
        print(error, file=sys.stderr)
        return 1

    if args.save_config and not save_config_fn(config):
        print(
            build_actionable_error(
                "save the configuration",
                why="the config file could not be written",
                next_step="check permissions on the config directory or run with --debug",
            ),
            file=sys.stderr,
        )
        return 1

    token = (args.token or "").strip()
    local = args.local
    if not token:
        if config.require_token:
            print(
                build_actionable_error(
                    "start personal-dashboard",
                    why="no --token was given and the config requires one",
                    next_step="run personal-dashboard --token <your-token>",
                ),
                file=sys.stderr,
            )
            return 1
        token = LOCAL_TOKEN
        local = True

    if not validate_interactive_tty_fn():
        print(
            "Error: personal-dashboard requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run personal-dashboard directly in a terminal session", file=sys.stderr)
        print("  - Use --save-config to update settings without starting the UI", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if local:
        logger.debug("Running locally with fixtures for token %s", token)
        services = build_local_app_services(token)
        fixtures = fixtures_for(token)
    else:
        services = build_default_app_services(config)
        fixtures = None

    if app_factory is None:
        from personal_dashboard.app import DashboardApp as _DashboardApp

        app_factory = _DashboardApp

    app = app_factory(token, config=config, services=services, fixtures=fixtures)
    app.run()
    return 0


__all__ = [
    "_apply_overrides",
    "_configure_logging",
    "_validate_interactive_tty",
    "main",
]
