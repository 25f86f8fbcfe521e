"""
Configuration management for Coin Dashboard.
Handles loading/saving settings including proxy and market API configuration.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from core.models import ViewMode

logger = logging.getLogger(__name__)

MIN_REFRESH_INTERVAL = 1  # seconds


@dataclass
class ProxyConfig:
    """Proxy configuration settings."""
    enabled: bool = False
    type: str = "http"  # "http" or "socks5"
    host: str = "127.0.0.1"
    port: int = 7890
    username: str = ""
    password: str = ""

    def get_proxy_url(self) -> Optional[str]:
        """Get proxy URL string for requests."""
        if not self.enabled:
            return None

        auth = ""
        if self.username and self.password:
            auth = f"{self.username}:{self.password}@"

        protocol = "socks5" if self.type == "socks5" else "http"
        return f"{protocol}://{auth}{self.host}:{self.port}"


@dataclass
class ApiConfig:
    """Market data API configuration."""
    base_url: str = "https://api.coingecko.com/api/v3"
    vs_currency: str = "usd"
    per_page: int = 100
    timeout: float = 10.0


@dataclass
class AppSettings:
    """Application settings."""
    version: str = "1.0.0"

    theme_mode: str = "dark"  # "dark" or "light"
    view_mode: str = "list"  # "list" or "grid"
    refresh_interval: int = 60  # seconds
    window_width: int = 1280
    window_height: int = 860

    proxy: ProxyConfig = field(default_factory=ProxyConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


class SettingsManager:
    """Manages application settings persistence."""

    RECOGNIZED_FIELDS = {
        'version', 'theme_mode', 'view_mode', 'refresh_interval',
        'window_width', 'window_height',
    }

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            if os.name == 'nt':  # Windows
                config_dir = Path(os.environ.get('APPDATA', '')) / 'coin-dashboard'
            else:  # Linux/Mac
                config_dir = Path.home() / '.config' / 'coin-dashboard'

        self.config_dir = config_dir
        self.config_file = config_dir / 'settings.json'
        self.settings = AppSettings()

        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> AppSettings:
        """
        Load settings from file.

        Missing files yield defaults; a corrupted file is reported and
        replaced by defaults in memory.

        Returns:
            Loaded settings
        """
        if not self.config_file.exists():
            return self.settings

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            proxy_data = data.pop('proxy', {})
            if not isinstance(proxy_data, dict):
                proxy_data = {}

            api_data = data.pop('api', {})
            if not isinstance(api_data, dict):
                api_data = {}

            filtered_data = {k: v for k, v in data.items() if k in self.RECOGNIZED_FIELDS}

            self.settings = AppSettings(
                proxy=ProxyConfig(**proxy_data),
                api=ApiConfig(**api_data),
                **filtered_data
            )
        except (json.JSONDecodeError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"Error loading settings, resetting to defaults: {e}")
            self.settings = AppSettings()

        self._validate()
        return self.settings

    def _validate(self) -> None:
        """Replace values the rest of the app cannot use with their defaults."""
        settings = self.settings
        defaults = AppSettings()

        if settings.view_mode not in [mode.value for mode in ViewMode]:
            logger.warning(
                f"Unknown view mode '{settings.view_mode}', falling back to {defaults.view_mode}"
            )
            settings.view_mode = defaults.view_mode

        try:
            interval = int(settings.refresh_interval)
        except (TypeError, ValueError, OverflowError):
            interval = 0
        if interval < MIN_REFRESH_INTERVAL:
            logger.warning(
                f"Invalid refresh interval {settings.refresh_interval!r}, "
                f"falling back to {defaults.refresh_interval}s"
            )
            interval = defaults.refresh_interval
        settings.refresh_interval = interval

    def save(self) -> None:
        """Save settings to file."""
        data = asdict(self.settings)

        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def update_theme(self, theme_mode: str) -> None:
        """Update theme mode."""
        self.settings.theme_mode = theme_mode
        self.save()

    def update_view_mode(self, view_mode: str) -> None:
        """Update list/grid view mode."""
        self.settings.view_mode = view_mode
        self.save()

    def _apply_proxy_env(self) -> None:
        """Apply proxy settings to environment variables."""
        proxy_url = self.settings.proxy.get_proxy_url()

        if proxy_url:
            os.environ['HTTP_PROXY'] = proxy_url
            os.environ['HTTPS_PROXY'] = proxy_url
            os.environ['http_proxy'] = proxy_url
            os.environ['https_proxy'] = proxy_url
        else:
            for key in ['HTTP_PROXY', 'HTTPS_PROXY', 'http_proxy', 'https_proxy']:
                os.environ.pop(key, None)


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """Get the global settings manager instance."""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
        _settings_manager.load()
    return _settings_manager
