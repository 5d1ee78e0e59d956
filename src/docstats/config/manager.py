"""Configuration management - loading, validation, and persistence."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import DocStatsConfig


class ConfigManager:
    """Manages loading and saving configuration."""

    DEFAULT_CONFIG_LOCATIONS = [
        Path("config/docstats.yaml"),
        Path.home() / ".config" / "docstats" / "config.yaml",
        Path.home() / ".docstats" / "config.yaml",
    ]

    def __init__(self, config_path: Path | None = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Explicit path to config file. If None, searches default locations.
        """
        self.config_path = config_path
        self._config: DocStatsConfig | None = None

    def load(self, create_if_missing: bool = True) -> DocStatsConfig:
        """
        Load configuration from file.

        Args:
            create_if_missing: Fall back to defaults if no config file is found.

        Returns:
            Loaded and validated configuration.

        Raises:
            FileNotFoundError: If no config found and create_if_missing is False.
            ValueError: If the config file is not valid YAML or fails validation.
        """
        config_file = self._find_config_file()

        if config_file is None:
            if create_if_missing:
                self._config = DocStatsConfig()
                return self._config
            raise FileNotFoundError(
                f"No configuration file found. Searched: {self._search_paths()}"
            )

        try:
            with open(config_file, encoding="utf-8") as f:
                config_dict = yaml.safe_load(f) or {}

            self._config = DocStatsConfig(**config_dict)
            self.config_path = config_file
            return self._config

        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {config_file}: {e}") from e
        except ValidationError as e:
            raise ValueError(f"Invalid configuration in {config_file}: {e}") from e
        except TypeError as e:
            raise ValueError(f"Config file {config_file} must contain a mapping") from e

    def save(self, config: DocStatsConfig | None = None, path: Path | None = None) -> Path:
        """
        Save configuration to a YAML file.

        Args:
            config: Configuration to save. Uses current config if None.
            path: Path to save to. Uses current config_path if None.

        Returns:
            Path the configuration was written to.
        """
        config_to_save = config or self._config
        if config_to_save is None:
            raise ValueError("No configuration to save")

        save_path = path or self.config_path
        if save_path is None:
            save_path = Path.home() / ".config" / "docstats" / "config.yaml"
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = config_to_save.model_dump(mode="json")

        with open(save_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                config_dict,
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )

        self.config_path = save_path
        self._config = config_to_save
        return save_path

    def _search_paths(self) -> list[Path]:
        if self.config_path:
            return [Path(self.config_path)]
        return self.DEFAULT_CONFIG_LOCATIONS

    def _find_config_file(self) -> Path | None:
        """Find the explicit config file, or the first existing default location."""
        if self.config_path:
            path = Path(self.config_path)
            return path if path.exists() else None

        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if location.exists():
                return location

        return None


_config_manager: ConfigManager | None = None


def get_config_manager(config_path: Path | None = None) -> ConfigManager:
    """
    Get the global config manager, replacing it when a new path is given.

    Args:
        config_path: Optional explicit config path.
    """
    global _config_manager
    if _config_manager is None or (
        config_path is not None and _config_manager.config_path != Path(config_path)
    ):
        _config_manager = ConfigManager(Path(config_path) if config_path else None)
    return _config_manager

