"""Load harness configuration from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from coretest.models.config import HarnessConfig

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "coretest.yaml"


def load_config(
    root: Path, config_path: Path | None = None, **overrides: Any
) -> HarnessConfig:
    """Load configuration for a run rooted at ``root``.

    An explicit ``config_path`` must exist. Otherwise ``coretest.yaml`` in the
    root is used when present, and defaults apply when it is not. Overrides
    whose value is None are ignored.

    Raises:
        FileNotFoundError: If an explicit config file does not exist
        ValueError: If the file is not valid YAML or does not fit the schema

    """
    if config_path is None:
        candidate = root / DEFAULT_CONFIG_NAME
        config_path = candidate if candidate.is_file() else None
    elif not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    data: dict[str, Any] = {}
    if config_path is not None:
        log.debug("Reading configuration from %s", config_path)
        data = _read_yaml(config_path)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return HarnessConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config schema in {config_path}: {e}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Invalid config schema in {path}: expected a mapping")
    return content
