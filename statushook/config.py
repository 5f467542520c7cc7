"""
YAML configuration loader.

Reads config.yaml and produces a typed ``Config``. Environment variables
override the file so secrets (the webhook URL) can stay out of it.
Falls back to defaults if the config file is missing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from statushook.models import ColorPalette, PageConfig, TrackerSettings, WebhookConfig
from statushook.translations import MessageKind

# Default path: config.yaml next to the project root
_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

_DEFAULT_PAGE = PageConfig(name="Discord", url="https://discordstatus.com")


class ConfigError(Exception):
    """Raised when the configuration is unusable."""


@dataclass
class Config:
    page: PageConfig
    webhook: WebhookConfig = field(default_factory=WebhookConfig)
    settings: TrackerSettings = field(default_factory=TrackerSettings)
    colors: ColorPalette = field(default_factory=ColorPalette)
    translations: Dict[MessageKind, str] = field(default_factory=dict)

    def validate(self) -> None:
        if not self.page.url:
            raise ConfigError("No status page URL configured (page.url / STATUSHOOK_URL)")
        if not self.webhook.url:
            raise ConfigError("No webhook URL configured (webhook.url / STATUSHOOK_WEBHOOK_URL)")
        if self.settings.check_interval <= 0:
            raise ConfigError("settings.check_interval must be positive")


def parse_color(value: Any) -> int:
    """Accept ``#RRGGBB`` strings or plain integers."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid color: {value!r}")
    if isinstance(value, int):
        color = value
    elif isinstance(value, str):
        raw = value.strip().lstrip("#")
        if raw.lower().startswith("0x"):
            raw = raw[2:]
        try:
            color = int(raw, 16)
        except ValueError:
            raise ConfigError(f"Invalid color: {value!r}")
    else:
        raise ConfigError(f"Invalid color: {value!r}")

    if not 0 <= color <= 0xFFFFFF:
        raise ConfigError(f"Color out of range: {value!r}")
    return color


def _parse_colors(raw: Mapping[str, Any]) -> ColorPalette:
    palette = ColorPalette()
    known = {f.name for f in fields(ColorPalette)}
    for key, value in raw.items():
        if key not in known:
            raise ConfigError(f"Unknown color key: {key}")
        setattr(palette, key, parse_color(value))
    return palette


def _parse_translations(raw: Mapping[str, Any]) -> Dict[MessageKind, str]:
    translations: Dict[MessageKind, str] = {}
    for key, value in raw.items():
        try:
            kind = MessageKind(key)
        except ValueError:
            raise ConfigError(f"Unknown translation key: {key}")
        translations[kind] = str(value)
    return translations


def _apply_env(config: Config, env: Mapping[str, str]) -> None:
    """Overlay STATUSHOOK_* / PORT environment variables."""
    if env.get("STATUSHOOK_URL"):
        config.page.url = env["STATUSHOOK_URL"]
    if env.get("STATUSHOOK_NAME"):
        config.page.name = env["STATUSHOOK_NAME"]
    if env.get("STATUSHOOK_WEBHOOK_URL"):
        config.webhook.url = env["STATUSHOOK_WEBHOOK_URL"]
    if env.get("STATUSHOOK_DB"):
        config.settings.db = env["STATUSHOOK_DB"]
    try:
        if env.get("STATUSHOOK_INTERVAL"):
            config.settings.check_interval = int(env["STATUSHOOK_INTERVAL"])
        if env.get("PORT"):
            config.settings.health_port = int(env["PORT"])
    except ValueError as exc:
        raise ConfigError(f"Invalid numeric environment value: {exc}")


def load_config(
    path: str | Path | None = None,
    env: Optional[Mapping[str, str]] = None,
) -> Config:
    """
    Load and parse the YAML configuration file.

    Args:
        path: Config file; defaults to $STATUSHOOK_CONFIG, then config.yaml.
        env: Environment mapping, ``os.environ`` when omitted.

    Returns:
        A Config with environment overrides applied. Not yet validated.
    """
    env = os.environ if env is None else env
    if path is None and env.get("STATUSHOOK_CONFIG"):
        path = env["STATUSHOOK_CONFIG"]
    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH

    raw: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{config_path} must contain a mapping")

    raw_page = raw.get("page") or {}
    page = PageConfig(
        name=raw_page.get("name", _DEFAULT_PAGE.name),
        url=raw_page.get("url", _DEFAULT_PAGE.url),
    )

    raw_webhook = raw.get("webhook") or {}
    webhook = WebhookConfig(
        url=raw_webhook.get("url", ""),
        username=raw_webhook.get("username"),
        avatar_url=raw_webhook.get("avatar_url"),
    )

    # Parse global settings
    raw_settings = raw.get("settings") or {}
    defaults = TrackerSettings()
    try:
        settings = TrackerSettings(
            check_interval=int(raw_settings.get("check_interval", defaults.check_interval)),
            db=str(raw_settings.get("db", defaults.db)),
            log_level=str(raw_settings.get("log_level", defaults.log_level)).upper(),
            request_timeout=int(raw_settings.get("request_timeout", defaults.request_timeout)),
            health_port=int(raw_settings.get("health_port", defaults.health_port)),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid settings value: {exc}")

    config = Config(
        page=page,
        webhook=webhook,
        settings=settings,
        colors=_parse_colors(raw.get("colors") or {}),
        translations=_parse_translations(raw.get("translations") or {}),
    )
    _apply_env(config, env)
    return config
