"""
Engine configuration.

Settings are process-wide defaults consulted whenever a value is built.
Formatting contexts are plain data handed explicitly to whatever displays
values. Both can be loaded from YAML files:

    # settings.yaml
    number_of_components: 15
    absurd_exponent: 3322

    # context.yaml
    up: 1.0
    lift: 5.0
    c4: 261.6 Hz
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from chuk_tuning.models.settings import EngineSettings

if TYPE_CHECKING:
    from chuk_tuning.models.context import FormattingContext

logger = logging.getLogger(__name__)

_settings = EngineSettings()


def get_settings() -> EngineSettings:
    """Get the active engine settings."""
    return _settings


def configure(settings: EngineSettings | None = None, **overrides: Any) -> EngineSettings:
    """
    Replace the active engine settings.

    Args:
        settings: New settings (default: keep the active ones)
        **overrides: Individual fields to change, validated like the model

    Returns:
        The settings now in effect
    """
    global _settings
    base = settings if settings is not None else _settings
    if overrides:
        base = EngineSettings(**{**base.model_dump(), **overrides})
    _settings = base
    logger.debug("Engine settings: %s", _settings.model_dump())
    return _settings


def reset_settings() -> EngineSettings:
    """Restore the default engine settings."""
    return configure(EngineSettings())


def set_number_of_components(number_of_components: int) -> EngineSettings:
    """Change how many primes new values track."""
    return configure(number_of_components=number_of_components)


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}")
    return data


def load_settings(path: Path | str, apply: bool = True) -> EngineSettings:
    """
    Load engine settings from a YAML file.

    Args:
        path: Path to the YAML file
        apply: Make the loaded settings active

    Returns:
        The loaded settings
    """
    path = Path(path)
    settings = EngineSettings(**_read_yaml(path))
    logger.info(f"Loaded engine settings from {path}")
    if apply:
        configure(settings)
    return settings


def load_context(path: Path | str) -> FormattingContext:
    """
    Load a formatting context from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        The loaded context
    """
    from chuk_tuning.models.context import FormattingContext

    path = Path(path)
    context = FormattingContext(**_read_yaml(path))
    logger.info(f"Loaded formatting context from {path}")
    return context
