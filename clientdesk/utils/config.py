# clientdesk/utils/config.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from .paths import CONFIG_DIR

SETTINGS_FILE = CONFIG_DIR / "settings.json"

_DEFAULTS: Dict[str, Any] = {
    "storage": {
        "clients_key": "clients",
        "projects_key": "projects",
    },
    "dashboard": {
        "recent_projects_limit": 5,
    },
}

_log = logging.getLogger(__name__)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: (dict(v) if isinstance(v, dict) else v) for k, v in base.items()}
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = {**out[k], **v}
        else:
            out[k] = v
    return out


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    p = Path(path) if path is not None else SETTINGS_FILE
    if p.exists():
        try:
            return _merge(_DEFAULTS, json.loads(p.read_text(encoding="utf-8")))
        except (OSError, ValueError) as e:
            _log.warning("Ignoring unreadable settings %s: %s", p, e)
            return _merge(_DEFAULTS, {})
    return _merge(_DEFAULTS, {})


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    p = Path(path) if path is not None else SETTINGS_FILE
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, indent=2), encoding="utf-8")
