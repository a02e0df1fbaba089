"""
Client configuration.

Provides the ``ClientConfig`` model, base URL selection and an optional
loader that builds a configuration from environment variables (and a
``.env`` file through python-dotenv). The client itself never reads the
environment; ``load_client_config`` is the only place that does.
"""

import os
from typing import Any, Mapping, Optional, Union

import dotenv
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .engine.exceptions import ConfigurationError
from .engine.validators import validate_config


PRODUCTION_URL = "https://input.payapi.io"
STAGING_URL = "https://staging-input.payapi.io"

REQUEST_TIMEOUT_S = 10.0

_ENV_KEYS = {
    "apiKey": "PAYAPI_API_KEY",
    "secret": "PAYAPI_SECRET",
    "password": "PAYAPI_PASSWORD",
    "isProd": "PAYAPI_IS_PROD",
    "devUrl": "PAYAPI_DEV_URL",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ClientConfig(BaseModel):
    """Merchant credentials and environment selection.

    Attributes:
        api_key: Merchant API key. Also the signing key for invoice and
            secureform payloads.
        secret: Shared secret used to sign the login credentials.
        password: API key password.
        is_prod: Use the production host instead of staging.
        dev_url: Base URL override, wins over ``is_prod``.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    api_key: str = Field(..., alias="apiKey")
    secret: str
    password: str
    is_prod: bool = Field(default=False, alias="isProd")
    dev_url: Optional[str] = Field(default=None, alias="devUrl")

    @classmethod
    def from_mapping(cls, config: Optional[Mapping[str, Any]]) -> "ClientConfig":
        """Validate a camelCase or snake_case mapping and build the model.

        Raises:
            ConfigurationError: naming the first missing or invalid field.
        """
        if not isinstance(config, Mapping):
            validate_config(config)
        normalized = _camel_case_keys(config)
        validate_config(normalized)
        try:
            return cls.model_validate(normalized)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Configuration: {e.errors()[0]['msg']}") from e

    def to_mapping(self) -> dict:
        return self.model_dump(by_alias=True)


def _camel_case_keys(config: Mapping[str, Any]) -> dict:
    aliases = {
        name: field.alias
        for name, field in ClientConfig.model_fields.items()
        if field.alias
    }
    return {aliases.get(key, key): value for key, value in config.items()}


def build_config(config: Union[ClientConfig, Mapping[str, Any], None]) -> ClientConfig:
    """Accept a ready ``ClientConfig`` or a plain mapping, always validated."""
    if isinstance(config, ClientConfig):
        validate_config(config.to_mapping())
        return config
    return ClientConfig.from_mapping(config)


def resolve_api_url(config: ClientConfig) -> str:
    """Pick the service base URL: ``dev_url`` > production > staging."""
    if config.dev_url:
        return config.dev_url
    return PRODUCTION_URL if config.is_prod else STAGING_URL


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Configuration: {name} must be a boolean")


def load_client_config(env_file: Optional[str] = None) -> ClientConfig:
    """
    Build a ``ClientConfig`` from ``PAYAPI_*`` environment variables.

    Args:
        env_file: Optional path to a .env file. Variables already present in
            the environment take precedence over the file.

    Returns:
        Validated configuration.

    Raises:
        ConfigurationError: If a mandatory variable is missing or invalid.
    """
    dotenv.load_dotenv(env_file)

    mapping = {}
    for field, env_key in _ENV_KEYS.items():
        raw = os.getenv(env_key)
        if raw is None:
            continue
        if field == "isProd":
            mapping[field] = _parse_bool(env_key, raw)
        elif raw:
            mapping[field] = raw
    return ClientConfig.from_mapping(mapping)
