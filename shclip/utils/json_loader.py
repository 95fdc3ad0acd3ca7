from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional


class SettingsError(RuntimeError):
    """Raised when strict loading of a settings or scene file fails (dev/CI)."""


def truthy_env(name: str) -> bool:
    """Return True if the environment variable is set to 1/true/yes/on."""
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge dictionaries (override wins)."""
    out: dict[str, Any] = dict(base)
    for k, v in override.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = deep_merge(dict(out[k]), v)
        else:
            out[k] = v
    return out


def report_failure(
        msg: str,
        *,
        strict: bool,
        warnings: list[str],
        logger: logging.Logger | None = None,
        exc: Exception | None = None,
) -> None:
    """
    Raise SettingsError when strict, otherwise record msg in warnings and log it.
    The caller falls back to its defaults in the non-strict case.
    """
    if strict:
        raise SettingsError(msg) from exc
    warnings.append(msg)
    if logger is not None:
        logger.warning(msg)


def quarantine(path: Path, *, logger: logging.Logger | None = None) -> Path:
    """Rename a broken file to <name>.broken-YYYYmmdd-HHMMSS and return the new path."""
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    broken = path.with_suffix(f".broken-{ts}")
    path.rename(broken)
    if logger is not None:
        logger.warning("Broken JSON quarantined to %s", broken)
    return broken


def read_json_dict(
        path: Path,
        *,
        strict: bool = False,
        quarantine_broken: bool = False,
        warnings: list[str] | None = None,
        logger: logging.Logger | None = None,
) -> Optional[dict[str, Any]]:
    """
    Read a JSON file whose top level is an object.

    Behavior:
    - strict=True: missing/unreadable/broken/non-object -> raise SettingsError
    - strict=False: return None and append a message to warnings
    - quarantine_broken=True: rename a file that fails to parse

    :param path: JSON file
    :return: dict, or None when the file could not be used
    """
    if warnings is None:
        warnings = []
    path = Path(path)

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        report_failure(f"JSON file missing: {path}",
                       strict=strict, warnings=warnings, logger=logger, exc=e)
        return None
    except OSError as e:
        report_failure(f"Failed to read JSON from {path}: ({e})",
                       strict=strict, warnings=warnings, logger=logger, exc=e)
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Failed to parse JSON from {path}: ({e})"
        if quarantine_broken:
            try:
                msg += f" -> quarantined to {quarantine(path, logger=logger)}"
            except OSError as qe:
                msg += f" (quarantine failed: {qe})"
        report_failure(msg, strict=strict, warnings=warnings, logger=logger, exc=e)
        return None

    if not isinstance(data, dict):
        report_failure(f"JSON must be an object at top-level: {path}",
                       strict=strict, warnings=warnings, logger=logger)
        return None
    return data
