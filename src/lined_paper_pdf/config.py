from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Sequence, Tuple

import yaml

from .pdf_writer import DEFAULT_MAX_PAGES, DEFAULT_TITLE, LINE_CAPS

HARDCODED_DEFAULTS: Dict[str, Any] = {
    "render": {
        "max_pages": DEFAULT_MAX_PAGES,
        "title": DEFAULT_TITLE,
        "line_cap": "round",
    },
    "report": {
        "float_digits": 3,
    },
}


def load_config(path: str) -> dict:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    return yaml.safe_load(p.read_text(encoding="utf-8"))


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key in base:
        value = base[key]
        if isinstance(value, Mapping):
            result[key] = copy.deepcopy(value)
        elif isinstance(value, list):
            result[key] = list(value)
        else:
            result[key] = value
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = deep_merge(result[key], value)  # type: ignore[arg-type]
        else:
            result[key] = value
    return result


def set_nested(config: MutableMapping[str, Any], path: Sequence[str], value: Any) -> None:
    if not path:
        return
    cursor: MutableMapping[str, Any] = config
    for key in path[:-1]:
        next_value = cursor.get(key)
        if not isinstance(next_value, MutableMapping):
            next_value = {}
            cursor[key] = next_value
        cursor = next_value
    cursor[path[-1]] = value


def parse_override(entry: str) -> Tuple[Tuple[str, ...], Any]:
    """Split ``render.max_pages=20000`` into a key path and a YAML-parsed value."""

    if "=" not in entry:
        raise ValueError("--opts erwartet 'pfad=wert'")
    raw_path, raw_value = entry.split("=", 1)
    path = tuple(part.strip() for part in raw_path.split(".") if part.strip())
    if not path:
        raise ValueError("--opts benötigt einen Schlüsselpfad, z. B. render.max_pages")
    try:
        value = yaml.safe_load(raw_value)
    except yaml.YAMLError as exc:
        raise ValueError(f"--opts {raw_path}: Wert konnte nicht geparst werden ({exc})") from exc
    return path, value


def load_settings(path: Optional[Path], overrides: Sequence[str] = ()) -> Dict[str, Any]:
    raw_cfg: Dict[str, Any] = {}
    if path is not None:
        loaded = load_config(str(path))
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, MutableMapping):
            raise ValueError("Config root must be a mapping")
        raw_cfg = dict(loaded)
    settings = deep_merge(HARDCODED_DEFAULTS, raw_cfg)
    for entry in overrides:
        key_path, value = parse_override(entry)
        set_nested(settings, key_path, value)
    return settings


def render_options(settings: Mapping[str, Any]) -> Dict[str, Any]:
    """Validated keyword arguments for :func:`pdf_writer.render_document`."""

    render_cfg = settings.get("render", {})
    if not isinstance(render_cfg, Mapping):
        raise ValueError("render config must be a mapping")
    max_pages = render_cfg.get("max_pages", DEFAULT_MAX_PAGES)
    if isinstance(max_pages, bool) or not isinstance(max_pages, int) or max_pages < 1:
        raise ValueError(f"render.max_pages must be a positive integer, got {max_pages!r}")
    line_cap = str(render_cfg.get("line_cap", "round")).lower()
    if line_cap not in LINE_CAPS:
        raise ValueError(f"render.line_cap must be one of {sorted(LINE_CAPS)}, got {line_cap!r}")
    return {
        "max_pages": max_pages,
        "title": str(render_cfg.get("title", DEFAULT_TITLE)),
        "line_cap": line_cap,
    }


def report_float_digits(settings: Mapping[str, Any]) -> int:
    report_cfg = settings.get("report", {})
    if not isinstance(report_cfg, Mapping):
        raise ValueError("report config must be a mapping")
    try:
        digits = int(report_cfg.get("float_digits", 3))
    except (TypeError, ValueError) as exc:
        raise ValueError("report.float_digits must be an integer") from exc
    return max(digits, 0)
