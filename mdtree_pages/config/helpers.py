"""Utility helpers shared by the configuration loader."""

from __future__ import annotations

import typing as typ

from .models import NavItemConfig, SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(raw: typ.Mapping[str, typ.Any], key: str) -> str:
    """Return ``raw[key]`` when it is a string, otherwise raise."""
    value = raw.get(key)
    if not isinstance(value, str):
        msg = f"Configuration is missing required string: {key}"
        raise SiteConfigError(msg)
    return value


def _parse_nav_item(item: object, index: int) -> NavItemConfig:
    """Build a NavItemConfig from a bare key or a single-key ``{key: title}`` map."""
    match item:
        case str() as key if key.strip():
            return NavItemConfig(key=key.strip())
        case dict() if len(item) == 1:
            key, title = next(iter(item.items()))
            key_text = _optional_str(key)
            if key_text:
                return NavItemConfig(key=key_text, title=_optional_str(title))
        case _:
            pass
    msg = f"nav[{index}] must be a path, URL, or single-key mapping; got {item!r}"
    raise SiteConfigError(msg)


def _parse_nav(value: object) -> list[NavItemConfig]:
    """Return the ordered navigation entries declared under ``nav``."""
    if not isinstance(value, list):
        msg = "Configuration is missing required list: nav (can be empty)"
        raise SiteConfigError(msg)
    return [_parse_nav_item(item, idx) for idx, item in enumerate(value)]


__all__ = ["_optional_str", "_parse_nav", "_parse_nav_item", "_require_str"]
