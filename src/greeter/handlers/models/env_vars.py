"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for the environment variables read by the
greeter handler. Variable names are matched case-insensitively.
"""

from typing import Annotated, Any, Mapping, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, ConfigDict, Field, model_validator

from greeter.handlers.utils.errors import ConfigurationError

DEFAULT_LOG_LEVEL = 'info'
DEFAULT_SERVICE_NAME = 'greeter'


class Configuration(BaseModel):
    """Environment variables for the greeter handler."""

    model_config = ConfigDict(frozen=True)

    # One of debug, info, warn, error, fatal; parsed by the logger factory
    LOG_LEVEL: Annotated[str, Field(
        description='Minimum severity written to the log',
    )] = DEFAULT_LOG_LEVEL

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        min_length=1,
        description='Service name stamped on every log record',
    )] = DEFAULT_SERVICE_NAME

    POWERTOOLS_LOGGER_LOG_EVENT: Annotated[bool, Field(
        description='Log the raw inbound event at debug level',
    )] = False

    @model_validator(mode='before')
    @classmethod
    def fold_key_case(cls, data: Any) -> Any:
        """Upper-case variable names; an exact upper-case key wins over other spellings."""
        if not isinstance(data, Mapping):
            return data
        folded = {key.upper(): value for key, value in data.items() if key != key.upper()}
        folded.update({key: value for key, value in data.items() if key == key.upper()})
        return folded


def load_configuration(environ: Optional[Mapping[str, str]] = None) -> Configuration:
    """
    Load the handler configuration.

    Args:
        environ: Explicit variable mapping. When omitted the process environment
            is parsed once and cached for the lifetime of the process.

    Returns:
        Validated, immutable configuration

    Raises:
        ConfigurationError: If a variable cannot be coerced into the model
    """
    try:
        if environ is None:
            return get_environment_variables(model=Configuration)
        return Configuration.model_validate(dict(environ))
    except (ValueError, TypeError) as exc:
        raise ConfigurationError(f'failed to load configuration: {exc}') from exc
