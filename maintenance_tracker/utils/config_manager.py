"""Configuration management utilities."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.constants import CONFIG_FILE_NAME
from ..exceptions import ValidationError
from ..models.config import TrackerConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages tracker configuration."""

    def __init__(self, data_dir: Path):
        """Initialize config manager."""
        self.data_dir = data_dir
        self.config_file = data_dir / CONFIG_FILE_NAME

    def get_config(self) -> TrackerConfig:
        """Load tracker configuration, falling back to defaults."""
        if not self.config_file.exists():
            return TrackerConfig()
        try:
            data = json.loads(self.config_file.read_text())
            return TrackerConfig(**data)
        except (json.JSONDecodeError, TypeError, PydanticValidationError) as e:
            logger.warning(f"Ignoring invalid config file {self.config_file}: {e}")
            return TrackerConfig()

    def save_config(self, config: TrackerConfig):
        """Save tracker configuration."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(config.model_dump_json(indent=2))

    def update(self, **values: Any) -> TrackerConfig:
        """Change configuration values and save the result.

        Raises:
            ValidationError: a key is unknown or a value is invalid
        """
        config = self.get_config()
        unknown = set(values) - set(TrackerConfig.model_fields)
        if unknown:
            raise ValidationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        try:
            updated = TrackerConfig(**{**config.model_dump(), **values})
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e
        self.save_config(updated)
        return updated

    def reset(self) -> TrackerConfig:
        """Restore default configuration."""
        config = TrackerConfig()
        self.save_config(config)
        return config
