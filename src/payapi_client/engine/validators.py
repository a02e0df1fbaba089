"""
Input validation for client configuration and per-operation arguments.

Every function here is pure: it returns None when the input is acceptable and
raises on the first violated rule. Rules are checked in a fixed order so the
reported field is deterministic.
"""

import math
import re
from numbers import Real
from typing import Any, Mapping, Optional

import pycountry
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError, ValidationError


PUBLIC_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_-]{5,49}$")
JWT_PATTERN = re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*$")

MIN_SSN_LENGTH = 8
MAX_SESSION_ID_LENGTH = 128
INVOICE_ID_LENGTH = (7, 14)

URL_SCHEMES = ("http", "https", "ftp")

_any_url = TypeAdapter(AnyUrl)


# ============================================================================
# Configuration
# ============================================================================

def validate_config(config: Optional[Mapping[str, Any]]) -> None:
    """
    Validate the constructor configuration mapping (camelCase keys).

    Raises:
        ConfigurationError: naming the first missing or invalid field.
    """
    if config is None:
        raise ConfigurationError("Configuration: missing constructor params")
    if not isinstance(config, Mapping):
        raise ConfigurationError("Configuration: constructor params must be an object")
    is_prod = config.get("isProd")
    if is_prod is not None and not isinstance(is_prod, bool):
        raise ConfigurationError("Configuration: isProd must be a boolean")
    for field in ("apiKey", "secret", "password"):
        value = config.get(field)
        if not value or not isinstance(value, str):
            raise ConfigurationError(f"Configuration: {field} is mandatory")
    dev_url = config.get("devUrl")
    if dev_url is not None and not isinstance(dev_url, str):
        raise ConfigurationError("Configuration: devUrl must be a string")


# ============================================================================
# Operations
# ============================================================================

def validate_fraud_check(params: Optional[Mapping[str, Any]]) -> None:
    if not params or not params.get("ip"):
        raise ValidationError("Validation: ip is mandatory")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_country_code(value: Any) -> bool:
    """True if ``value`` is an ISO 3166-1 alpha-2 country code."""
    if not isinstance(value, str) or len(value) != 2 or not value.isalpha():
        return False
    return pycountry.countries.get(alpha_2=value.upper()) is not None


def validate_credit_check(
    ssn: Any,
    amount: Any,
    country_code: Any,
    consumer_number: Any,
) -> None:
    if not ssn or not isinstance(ssn, str) or len(ssn) < MIN_SSN_LENGTH:
        raise ValidationError("Validation: ssn must be a valid social security number")
    if not _is_number(amount) or not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Validation: amount must be a valid positive number")
    if not is_country_code(country_code):
        raise ValidationError("Validation: countryCode must be a valid ISO alpha-2 code")
    if not isinstance(consumer_number, int) or isinstance(consumer_number, bool) or consumer_number < 1:
        raise ValidationError(
            "Validation: consumerNumber must be a valid autoincremental number"
        )


def is_url(value: Any) -> bool:
    """True if ``value`` is an http, https or ftp URL, the scheme being optional."""
    if not isinstance(value, str) or not value:
        return False
    candidate = value if "://" in value else "http://" + value
    try:
        url = _any_url.validate_python(candidate)
    except PydanticValidationError:
        return False
    return url.scheme in URL_SCHEMES and bool(url.host)


def validate_tupas_url(redirect_url: Any, session_id: Optional[str] = None) -> None:
    if not is_url(redirect_url):
        raise ValidationError("Validation: redirectUrl must be a valid URL")
    if session_id is not None and not isinstance(session_id, str):
        raise ValidationError("Validation: sessionId must be a string")
    if session_id and len(session_id) > MAX_SESSION_ID_LENGTH:
        raise ValidationError(
            f"Validation: sessionId is too large (max {MAX_SESSION_ID_LENGTH} characters)"
        )


def validate_invoice_id(invoice_id: Any) -> None:
    low, high = INVOICE_ID_LENGTH
    if not isinstance(invoice_id, str) or not low <= len(invoice_id) <= high:
        raise ValidationError("Validation: invoiceId is not valid")


def validate_invoice(invoice: Any, invoicing_client: Any) -> None:
    if invoice is None or not isinstance(invoice, Mapping):
        raise ValidationError("Validation: invoice object parameter is mandatory")
    if invoicing_client is None or invoicing_client == "":
        raise ValidationError("Validation: invoicingClient parameter is mandatory")
    if not isinstance(invoicing_client, (str, Mapping)):
        raise ValidationError(
            "Validation: invoicingClient must be a valid id or a client object"
        )


def validate_secureform_data(data: Any) -> None:
    if not data:
        raise ValidationError("Validation: secureform data is missing")
    if not isinstance(data, Mapping):
        raise ValidationError("Validation: secureform data must be an object")
    if not isinstance(data.get("order"), Mapping):
        raise ValidationError("Validation: order must be a valid object")
    products = data.get("products")
    if not isinstance(products, list) or not products:
        raise ValidationError(
            "Validation: products must be an array with at least one product item"
        )


def validate_public_id(public_id: Any) -> None:
    if not public_id:
        raise ValidationError("Validation: publicId is mandatory")
    if not isinstance(public_id, str) or not PUBLIC_ID_PATTERN.fullmatch(public_id):
        raise ValidationError("Validation: publicId is not valid")


def validate_jwt_shape(token: Any) -> None:
    if not isinstance(token, str) or not JWT_PATTERN.fullmatch(token):
        raise ValidationError("Validation: token must be a valid JWT")
