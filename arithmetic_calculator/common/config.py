"""Runtime settings read from the environment."""
import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ENV_PREFIX: str = "ARITHMETIC_CALCULATOR_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CalculatorSettings(BaseModel):
    """
    Settings shared by the command line and the batch runner.

    Environment variables:
        - ARITHMETIC_CALCULATOR_LOG_LEVEL
        - ARITHMETIC_CALCULATOR_MAX_WORKERS
    """

    # Settings are resolved once at startup and never change afterwards
    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = Field(default="INFO", description="Level of the package logger")
    max_workers: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of simultaneous worker processes"
    )

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, v: object) -> object:
        """Accept level names in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CalculatorSettings":
        """
        Build settings from environment variables, ignoring blank ones.

        :param Mapping environ: Variables to read, defaults to os.environ

        :return: Validated settings
        :rtype: CalculatorSettings
        :raises pydantic.ValidationError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values = {}
        for field_name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{field_name.upper()}", "")
            if raw.strip():
                values[field_name] = raw.strip()
        return cls(**values)
