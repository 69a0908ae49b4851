"""Configuration loading and saving.

Config file location: ~/.config/musicthread-feed/config.toml

Schema:
    [api]
    base_url = "https://musicthread.app"

    [feed]
    base_url = "https://feed.musicthread.app"   # where this feed is served
    site_url = "https://musicthread.app"        # human-facing thread/link pages

    [server]
    host = "127.0.0.1"
    port = 8787
    invalid_path_status = 404                   # 404 or 400

Every setting is optional; a missing file means all defaults.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomli_w

from .client import API_BASE_URL
from .feed import FEED_BASE_URL, SITE_BASE_URL, FeedLinks

CONFIG_DIR = Path.home() / ".config" / "musicthread-feed"
CONFIG_FILE = CONFIG_DIR / "config.toml"

INVALID_PATH_STATUSES = (400, 404)


@dataclass
class AppConfig:
    api_base_url: str = API_BASE_URL
    feed_base_url: str = FEED_BASE_URL
    site_base_url: str = SITE_BASE_URL
    invalid_path_status: int = 404
    host: str = "127.0.0.1"
    port: int = 8787

    @property
    def links(self) -> FeedLinks:
        return FeedLinks(
            feed_base_url=self.feed_base_url,
            site_base_url=self.site_base_url,
        )


def load_config(config_path: Path = CONFIG_FILE) -> AppConfig:
    """Load and validate config from TOML file, falling back to defaults."""
    if not config_path.exists():
        return AppConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    api_data = data.get("api", {})
    feed_data = data.get("feed", {})
    server_data = data.get("server", {})
    defaults = AppConfig()

    invalid_path_status = int(
        server_data.get("invalid_path_status", defaults.invalid_path_status)
    )
    if invalid_path_status not in INVALID_PATH_STATUSES:
        raise ValueError(
            f"server.invalid_path_status must be 400 or 404, got {invalid_path_status}"
        )

    port = int(server_data.get("port", defaults.port))
    if not 0 <= port <= 65535:
        raise ValueError(f"server.port out of range: {port}")

    return AppConfig(
        api_base_url=api_data.get("base_url", defaults.api_base_url),
        feed_base_url=feed_data.get("base_url", defaults.feed_base_url),
        site_base_url=feed_data.get("site_url", defaults.site_base_url),
        invalid_path_status=invalid_path_status,
        host=server_data.get("host", defaults.host),
        port=port,
    )


def save_config(config: AppConfig, config_path: Path = CONFIG_FILE) -> None:
    """Write config to TOML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "api": {
            "base_url": config.api_base_url,
        },
        "feed": {
            "base_url": config.feed_base_url,
            "site_url": config.site_base_url,
        },
        "server": {
            "host": config.host,
            "port": config.port,
            "invalid_path_status": config.invalid_path_status,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)


def config_exists(config_path: Path = CONFIG_FILE) -> bool:
    """Check if config file exists."""
    return config_path.exists()
