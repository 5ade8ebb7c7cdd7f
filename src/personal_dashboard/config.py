"""Configuration persistence: load, save, and validate the user config file."""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from personal_dashboard.models import (
    CONFIG_APP_NAME,
    DEFAULT_BASE_URL,
    DEFAULT_CHECKOUT_DELAY_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    MAX_CHECKOUT_DELAY_SECONDS,
    MAX_REQUEST_TIMEOUT_SECONDS,
    UserConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/personal-dashboard/config.json
    - macOS: ~/Library/Application Support/personal-dashboard/config.json
    - Windows: %APPDATA%/personal-dashboard/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    return {
        "base_url": config.base_url,
        "request_timeout_seconds": config.request_timeout_seconds,
        "checkout_delay_seconds": config.checkout_delay_seconds,
        "require_token": config.require_token,
        "version": config.version,
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if isinstance(value, bool) and expected_type is not bool:
        return default
    if not isinstance(value, expected_type):
        return default
    return value


def _coerce_request_timeout(value: Any) -> int:
    """Clamp a request timeout to 1..MAX_REQUEST_TIMEOUT_SECONDS."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_REQUEST_TIMEOUT_SECONDS
    return max(1, min(value, MAX_REQUEST_TIMEOUT_SECONDS))


def _coerce_checkout_delay(value: Any) -> float:
    """Clamp a checkout delay to 0..MAX_CHECKOUT_DELAY_SECONDS."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CHECKOUT_DELAY_SECONDS
    if not math.isfinite(value):
        return DEFAULT_CHECKOUT_DELAY_SECONDS
    return max(0.0, min(float(value), MAX_CHECKOUT_DELAY_SECONDS))


def _coerce_base_url(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_BASE_URL
    return value.strip().rstrip("/")


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    if not isinstance(data, dict):
        raise TypeError(f"config root must be an object, got {type(data).__name__}")
    return UserConfig(
        base_url=_coerce_base_url(data.get("base_url")),
        request_timeout_seconds=_coerce_request_timeout(data.get("request_timeout_seconds")),
        checkout_delay_seconds=_coerce_checkout_delay(data.get("checkout_delay_seconds")),
        require_token=_safe_get(data, "require_token", False, bool),
        version=_safe_get(data, "version", 1, int),
    )


def load_config() -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        return _dict_to_config(data)
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return UserConfig()
    except (KeyError, TypeError) as e:
        logger.warning("Config file has invalid structure, using defaults: %s", e)
        return UserConfig()
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()


def save_config(config: UserConfig) -> bool:
    """Save configuration to disk atomically.

    Writes to a temp file in the config directory, then os.replace()s it
    over the real file. Returns True on success, False on failure.
    """
    config_path = get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        json_str = json.dumps(_config_to_dict(config), indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(dir=config_path.parent, suffix=".tmp", prefix=".config-")
        closed = False
        try:
            os.write(fd, json_str.encode("utf-8"))
            os.close(fd)
            closed = True
            os.replace(tmp_path, config_path)
        except BaseException:
            if not closed:
                os.close(fd)
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "get_config_path",
    "load_config",
    "save_config",
]
