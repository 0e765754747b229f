"""Generator configuration with YAML file and environment loading."""

import os
import logging
from pathlib import Path
from typing import Optional, Dict, Any, List

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

ENV_PREFIX = "POMGEN_"
CONFIG_DIR = ".pomgen"


class GeneratorConfig(BaseModel):
    """Configuration for page object generation runs."""

    # Output
    out_dir: str = Field(
        default="generated",
        description="Root directory for generated sources",
    )

    # Acquisition
    timeout: float = Field(
        default=10.0,
        gt=0.0,
        description="Network fetch timeout in seconds",
    )
    max_redirects: int = Field(
        default=5,
        ge=0,
        description="Maximum redirect hops followed per fetch",
    )
    user_agent: str = Field(
        default="pomgen/0.1",
        description="User-Agent header sent with fetches",
    )

    # Naming
    max_text_length: int = Field(
        default=50,
        ge=1,
        description="Longest visible text used as a field name source",
    )

    class Config:
        """Pydantic configuration."""

        extra = "ignore"


def get_config_paths() -> List[Path]:
    """
    Get configuration file paths in priority order.

    Returns:
        List of paths, highest priority last
    """
    return [
        Path.home() / CONFIG_DIR / "config.yaml",
        Path.cwd() / CONFIG_DIR / "config.yaml",
    ]


def load_config(config_path: Optional[str] = None) -> GeneratorConfig:
    """
    Load generator configuration from files and environment.

    Configuration is merged in this order (later overrides earlier):
    1. Default values
    2. Global config (~/.pomgen/config.yaml)
    3. Project config (./.pomgen/config.yaml)
    4. Explicit config_path if provided
    5. Environment variables (POMGEN_*)

    Args:
        config_path: Optional explicit config file path

    Returns:
        Merged GeneratorConfig instance
    """
    merged_config: Dict[str, Any] = {}

    config_paths = get_config_paths()
    if config_path:
        config_paths.append(Path(config_path))

    for path in config_paths:
        if path.exists():
            try:
                with open(path) as f:
                    file_config = yaml.safe_load(f) or {}
                    # Only merge 'generator' section if present, otherwise use whole file
                    if "generator" in file_config:
                        merged_config.update(file_config["generator"] or {})
                    else:
                        merged_config.update(file_config)
                    logger.debug(f"Loaded config from {path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {path}: {e}")

    merged_config.update(_get_env_overrides())

    return GeneratorConfig(**merged_config)


def _get_env_overrides() -> Dict[str, Any]:
    """
    Get configuration overrides from environment variables.

    Environment variables are prefixed with POMGEN_, e.g.
    POMGEN_OUT_DIR=build/pages or POMGEN_TIMEOUT=30.

    Returns:
        Dictionary of overrides
    """
    overrides: Dict[str, Any] = {}

    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            config_key = key[len(ENV_PREFIX) :].lower()
            if config_key in GeneratorConfig.model_fields:
                overrides[config_key] = value

    return overrides
