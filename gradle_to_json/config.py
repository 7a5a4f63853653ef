"""Runtime settings, read from ``GRADLE_TO_JSON_*`` environment variables."""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, field_validator

ENV_PREFIX = "GRADLE_TO_JSON_"


class ParserSettings(BaseModel):
    """Settings shared by the parser, the driver and the CLI.

    Environment variables:
        GRADLE_TO_JSON_EVAL_DEPENDENCIES_ONLY - interpolate ``$name`` only
            inside ``dependencies`` blocks (default: true)
        GRADLE_TO_JSON_LOG_LEVEL  - log level (default: WARNING)
        GRADLE_TO_JSON_LOG_FORMAT - console | json (default: console)
    """

    eval_dependencies_only: bool = True
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @classmethod
    def from_env(cls) -> ParserSettings:
        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw
        return cls.model_validate(values)
