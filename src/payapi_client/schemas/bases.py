"""
Base Schema Models for the PayApi client

Defines the base class shared by every wire model. Models use the service's
camelCase names as aliases so they serialize exactly as the API expects while
remaining addressable by snake_case attribute names in Python.

Dependencies:
    - pydantic: For data validation and serialization
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class CanonicalModel(BaseModel):
    """
    Pydantic base model with wire-format serialization.

    Example:
        class LoginRequest(CanonicalModel):
            key: str
            token: str

        LoginRequest(key="k", token="t").to_wire()
        # Returns: {"key": "k", "token": "t"}
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """
        Convert model to the JSON-ready dictionary sent to the service.

        Fields left at ``None`` are omitted and aliases are used as keys.

        Returns:
            Dict[str, Any]: JSON-compatible dictionary.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
