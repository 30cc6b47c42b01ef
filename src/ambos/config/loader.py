"""YAML configuration loading utilities."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from ambos.config.models import AmbosConfig
from ambos.errors import ConfigurationError


def load_config(path: Path | str) -> AmbosConfig:
    """Load configuration from a YAML file.

    An empty file yields the default configuration.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigurationError: If the file is not valid YAML or fails validation.
    """
    path = Path(path)
    with path.open() as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    try:
        return AmbosConfig.model_validate(raw or {})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path}: {e}") from e


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).parent.parent.parent.parent / "configs" / "default.yaml"
