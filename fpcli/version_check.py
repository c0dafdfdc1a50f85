"""Checking, at most once a day, whether a newer release is available."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

import platformdirs

logger = logging.getLogger(__name__)

VERSION_CHECK_DURATION = 60 * 60 * 24  # seconds between two checks
CHECK_FILE_NAME = "version_check"


def _default_config_dir() -> Path:
    return Path(platformdirs.user_config_dir("fiberplane-cli", "Fiberplane"))


def should_check_version(check_file: str | Path, now: float | None = None) -> bool:
    """Tell whether the last check, marked by the file's modification time, is over a day old.

    A file that cannot be inspected (most likely because it does not exist)
    means a check is due.
    """
    if now is None:
        now = time.time()
    try:
        modified = Path(check_file).stat().st_mtime
    except OSError as err:
        logger.debug("checking the update file check resulted in a error: %s", err)
        return True
    return modified < now - VERSION_CHECK_DURATION


def touch_check_file(check_file: str | Path) -> None:
    """Create the file, or truncate it, so that its modification time is now."""
    with open(check_file, "w", encoding="utf-8"):
        pass


def background_version_check(
    fetch_latest_version: Callable[[], str],
    current_version: str,
    config_dir: str | Path | None = None,
) -> str | None:
    """Return the latest version if it differs from the current one, else None.

    The remote version is only fetched when the last check is over a day old;
    otherwise None is returned straight away.
    """
    config_dir = _default_config_dir() if config_dir is None else Path(config_dir)
    check_file = config_dir / CHECK_FILE_NAME

    if not should_check_version(check_file):
        return None

    try:
        remote_version = fetch_latest_version()
    except Exception as exc:
        raise RuntimeError("failed to check for remote version") from exc

    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        logger.debug("unable to create the config dir: %s", err)
    else:
        try:
            touch_check_file(check_file)
        except OSError as err:
            logger.debug("unable to create the version check file: %s", err)

    if remote_version != current_version:
        return remote_version
    return None