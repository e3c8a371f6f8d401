"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations
"""

import logging
import os
from pathlib import Path
from typing import List, Optional
import yaml

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_ALARM_SOURCE = (
    "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
    "mixkit-retro-game-emergency-alarm-1000-BMSvUPTHT7kG1wGX2GUCXKoinqpVsc.wav"
)


class Settings(BaseSettings):
    """
    Application settings with multiple sources:
    1. Default values (hardcoded)
    2. Environment variables (TASKREMINDER_*)
    3. YAML config file (applied last)
    """
    model_config = SettingsConfigDict(
        env_prefix='TASKREMINDER_',
        env_file='.env',
        env_file_encoding='utf-8',
        validate_assignment=True
    )

    # Application paths
    app_name: str = "TaskReminder"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None

    # Database
    database_url: Optional[str] = None

    # Journal sync
    journal_ws_url: str = "ws://localhost:8080"

    # Alarm
    builtin_alarm_source: str = DEFAULT_ALARM_SOURCE
    test_preview_ms: int = 3000

    # Timer
    tick_interval_ms: int = 1000
    max_minutes: int = 1440
    time_presets: List[int] = [5, 15, 30, 60]
    extend_presets: List[int] = [5, 10]

    log_level: str = "INFO"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        self._load_yaml_config()

    def _init_paths(self):
        """Initialize default paths based on OS"""
        if self.config_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.config'
            self.config_dir = base / self.app_name.lower()

        if self.data_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.local' / 'share'
            self.data_dir = base / self.app_name.lower()

        # Create directories if they don't exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load_yaml_config(self):
        """Load configuration from YAML file"""
        # First check in workspace config folder
        config_file = Path("config/settings.yaml")
        if not config_file.exists():
            # Then check in user's config directory
            config_file = self.config_dir / "settings.yaml"

        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
            if config_data:
                fields = type(self).model_fields
                for key, value in config_data.items():
                    if key in fields:
                        setattr(self, key, value)
                    else:
                        logger.warning(f"Ignoring unknown setting '{key}' in {config_file}")

    def get_db_url(self) -> str:
        """Get database URL, creating default if not set"""
        if self.database_url:
            return self.database_url

        db_path = self.data_dir / 'taskreminder.db'
        return f"sqlite:///{db_path}"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

