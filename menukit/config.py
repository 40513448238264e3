"""
Layered settings: built-in defaults, then a global TOML file, then an app
TOML file, then MENUKIT_* environment variables.

Example menukit.toml:

    [layout]
    page_size = 8
    result_height = 15

    [terminal]
    mouse = false

    [ui.theme]
    border_style = "double"
    default_marker = "(default)"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple


_GLOBAL_CONFIG_ENVVAR = "MENUKIT_CONFIG"
_APP_CONFIG_ENVVAR = "MENUKIT_APP_CONFIG"
_APP_CONFIG_NAME = "menukit.toml"


_override_global_config_path: Optional[Path] = None
_override_app_config_path: Optional[Path] = None


@dataclass(frozen=True)
class LayoutConfig:
    x: int = 1
    y: int = 1
    width: int = 78
    page_size: int = 10
    result_height: int = 20


@dataclass(frozen=True)
class TerminalConfig:
    mouse: bool = True
    escape_timeout_ms: int = 30


@dataclass(frozen=True)
class UIThemeColors:
    title: str = "\x1b[37m\x1b[1m"
    text: str = "\x1b[36m"
    warning: str = "\x1b[33m\x1b[1m"
    frame_border: str = "\x1b[34m\x1b[1m"


@dataclass(frozen=True)
class UIThemeConfig:
    border_style: str = "single"
    default_marker: str = "*"
    colors: UIThemeColors = UIThemeColors()


@dataclass(frozen=True)
class UIConfig:
    theme: UIThemeConfig = UIThemeConfig()


@dataclass(frozen=True)
class MenukitConfig:
    layout: LayoutConfig = LayoutConfig()
    terminal: TerminalConfig = TerminalConfig()
    ui: UIConfig = UIConfig()


def _positive_int(value: Any, default: int) -> int:
    try:
        return max(1, int(str(value).strip()))
    except (TypeError, ValueError):
        return default


def _flag(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    val = str(value).strip().lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    return default


def _text(value: Any, default: str) -> str:
    return "" if value is None else str(value)


def _merge(section: Any, data: Any, coerce: Callable[[Any, Any], Any]) -> Any:
    """Copy the scalar keys of data that name fields of section."""
    if not isinstance(data, dict):
        return section
    changes: Dict[str, Any] = {}
    for f in fields(section):
        if f.name in data and not isinstance(data[f.name], dict):
            current = getattr(section, f.name)
            changes[f.name] = coerce(data[f.name], current)
    return replace(section, **changes) if changes else section


def _coerce_terminal(value: Any, current: Any) -> Any:
    if isinstance(current, bool):
        return _flag(value, current)
    return _positive_int(value, current)


def _config_from_dict(base: MenukitConfig, data: dict) -> MenukitConfig:
    if not isinstance(data, dict):
        return base

    layout = _merge(base.layout, data.get("layout"), _positive_int)
    terminal = _merge(base.terminal, data.get("terminal"), _coerce_terminal)

    theme = base.ui.theme
    ui_data = data.get("ui")
    theme_data = ui_data.get("theme") if isinstance(ui_data, dict) else None
    if isinstance(theme_data, dict):
        theme = _merge(theme, theme_data, _text)
        theme = replace(theme, colors=_merge(theme.colors, theme_data.get("colors"), _text))

    return MenukitConfig(layout=layout, terminal=terminal, ui=replace(base.ui, theme=theme))


# env var -> (section, field, parser)
_ENV_OVERRIDES: Tuple[Tuple[str, str, str, Callable[[Any, Any], Any]], ...] = (
    ("MENUKIT_PAGE_SIZE", "layout", "page_size", _positive_int),
    ("MENUKIT_RESULT_HEIGHT", "layout", "result_height", _positive_int),
    ("MENUKIT_WIDTH", "layout", "width", _positive_int),
    ("MENUKIT_MOUSE", "terminal", "mouse", _flag),
    ("MENUKIT_ESCAPE_TIMEOUT_MS", "terminal", "escape_timeout_ms", _positive_int),
)


def _apply_env_overrides(cfg: MenukitConfig) -> MenukitConfig:
    for var_name, section_name, field_name, parse in _ENV_OVERRIDES:
        raw = os.getenv(var_name)
        if raw is None:
            continue
        section = getattr(cfg, section_name)
        value = parse(raw, getattr(section, field_name))
        cfg = replace(cfg, **{section_name: replace(section, **{field_name: value})})
    return cfg


def _default_global_config_path() -> Path:
    p = os.getenv(_GLOBAL_CONFIG_ENVVAR)
    if p:
        return Path(p)
    base = os.getenv("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / "menukit" / "config.toml"


def _default_app_config_path() -> Optional[Path]:
    p = os.getenv(_APP_CONFIG_ENVVAR)
    if p:
        return Path(p)
    candidate = Path.cwd() / _APP_CONFIG_NAME
    return candidate if candidate.is_file() else None


def _load_toml(path: Path) -> dict:
    try:
        import tomllib  # py3.11+
    except ModuleNotFoundError as e:
        raise RuntimeError("tomllib is required to read menukit TOML config") from e

    with path.open("rb") as fh:
        data = tomllib.load(fh)
    return data if isinstance(data, dict) else {}


def load_config(
    *,
    global_config_path: Optional[str | Path] = None,
    app_config_path: Optional[str | Path] = None,
) -> MenukitConfig:
    """
    Build a config from the files and the environment.

    Args:
        global_config_path: Overrides $MENUKIT_CONFIG / the XDG location
        app_config_path: Overrides $MENUKIT_APP_CONFIG / ./menukit.toml

    Returns:
        The merged config; missing files are skipped
    """
    cfg = MenukitConfig()
    layers = (
        Path(global_config_path) if global_config_path is not None else _default_global_config_path(),
        Path(app_config_path) if app_config_path is not None else _default_app_config_path(),
    )
    for path in layers:
        if path is not None and path.is_file():
            cfg = _config_from_dict(cfg, _load_toml(path))
    return _apply_env_overrides(cfg)


def configure(
    *,
    global_config_path: Optional[str | Path] = None,
    app_config_path: Optional[str | Path] = None,
) -> MenukitConfig:
    """Set the config file locations used by get_config() and reload."""
    global _override_global_config_path
    global _override_app_config_path

    _override_global_config_path = Path(global_config_path) if global_config_path is not None else None
    _override_app_config_path = Path(app_config_path) if app_config_path is not None else None

    get_config.cache_clear()
    return get_config()


@lru_cache(maxsize=1)
def get_config() -> MenukitConfig:
    return load_config(
        global_config_path=_override_global_config_path,
        app_config_path=_override_app_config_path,
    )
