"""
Configuration for the Roster command-line application.
"""

import json
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .core.exceptions import ConfigurationError


class RosterSettings(BaseModel):
    """Settings read from an optional JSON configuration file."""
    model_config = ConfigDict(extra="forbid")

    school_name: str = Field("Escola Sempre Logica", min_length=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    report_sink: Literal["console", "logging", "memory"] = "console"


def load_settings(path: Optional[str] = None) -> RosterSettings:
    """Load settings from ``path``; defaults apply when no path is given."""
    if path is None:
        return RosterSettings()
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read configuration file {path}: {e}",
            error_code="CONFIG_UNREADABLE",
            details={'path': path}
        ) from e
    try:
        return RosterSettings.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {path}",
            error_code="CONFIG_INVALID",
            details={'path': path, 'errors': e.errors(include_url=False)}
        ) from e
