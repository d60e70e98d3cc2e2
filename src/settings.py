"""Simple cross-platform settings storage for the app.

Stores a small JSON settings file in a per-user application data location
(also home to the analysis history and chat transcript) and exposes helpers
to load/save settings and read the typed options the app uses.

Set CRYPTOFINDER_HOME to relocate the data directory.
"""

from __future__ import annotations

import json
import logging
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_APP_NAME = "CryptoFinder"
_SETTINGS_FILE = "settings.json"
ENV_HOME = "CRYPTOFINDER_HOME"

DEFAULT_HISTORY_LIMIT = 10
DEFAULT_MAX_UPLOAD_MB = 512
DEFAULT_LOG_LEVEL = "WARNING"


def _get_user_data_dir() -> Path:
    """Return a platform-appropriate per-user data directory for the app."""
    override = os.getenv(ENV_HOME)
    if override:
        return Path(override).expanduser()
    system = platform.system()
    home = Path.home()
    if system == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / _APP_NAME
        return home / f".{_APP_NAME}"
    if system == "Darwin":
        return home / "Library" / "Application Support" / _APP_NAME
    # Linux / other: honor XDG_DATA_HOME if set
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / _APP_NAME
    return home / ".local" / "share" / _APP_NAME


def ensure_data_dir() -> Path:
    d = _get_user_data_dir()
    d.mkdir(parents=True, exist_ok=True)
    if os.name == "posix":
        try:
            d.chmod(0o700)
        except OSError:
            pass
    return d


def settings_path() -> Path:
    return ensure_data_dir() / _SETTINGS_FILE


def write_json_atomic(path: Path, data: Any) -> None:
    """Write JSON next to `path` and replace it in one step."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        if os.name == "posix":
            try:
                tmp.chmod(0o600)
            except OSError:
                pass
        os.replace(str(tmp), str(path))
    finally:
        if tmp.exists():
            try:
                tmp.unlink()
            except OSError:
                pass


def load_settings() -> Dict[str, Any]:
    p = settings_path()
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", p, e)
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: Dict[str, Any]) -> None:
    write_json_atomic(settings_path(), data)


def get_setting(key: str, default: Optional[Any] = None) -> Any:
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> None:
    s = load_settings()
    s[key] = value
    save_settings(s)


def _get_int(key: str, default: int, minimum: int) -> int:
    val = get_setting(key)
    if val is None:
        return default
    try:
        return max(minimum, int(val))
    except (TypeError, ValueError):
        logger.warning("Invalid %s setting %r; using %d", key, val, default)
        return default


def get_history_limit() -> int:
    """How many analyses the history keeps (oldest evicted first)."""
    return _get_int("history_limit", DEFAULT_HISTORY_LIMIT, 1)


def get_max_upload_bytes() -> int:
    return _get_int("max_upload_mb", DEFAULT_MAX_UPLOAD_MB, 1) * 1024 * 1024


def get_catalog_path() -> Optional[Path]:
    """User-supplied signature catalog (JSON), if configured."""
    val = get_setting("catalog_path")
    if not val:
        return None
    return Path(val).expanduser()


def get_log_level() -> str:
    val = str(get_setting("log_level", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL)
    return val.upper()
