"""Response validation configuration models."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator


class PlainPatterns(BaseModel):
    """Body given as a plain list: only the first string is used as a positive pattern."""

    patterns: List[Any] = Field(default_factory=list)


class PositiveNegativePatterns(BaseModel):
    """Body given as a mapping of ``positive``/``negative`` pattern lists.

    The mapping is kept as loaded, in key order, so pattern set construction
    sees exactly what the operator wrote.
    """

    sections: Dict[str, Any] = Field(default_factory=dict)


BodyPatterns = Union[PlainPatterns, PositiveNegativePatterns]


class JSONCheckConfig(BaseModel):
    description: str = ""
    condition: Dict[str, Any]


class ResponseConfig(BaseModel):
    """What a probe response must look like to count as up."""

    status: List[int] = Field(default_factory=list)
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[BodyPatterns] = None
    json_checks: List[JSONCheckConfig] = Field(default_factory=list, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("status", mode="before")
    @classmethod
    def _status_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (int, str)):
            return [value]
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_dict(cls, value: Any) -> Any:
        return value or {}

    @field_validator("body", mode="before")
    @classmethod
    def _body_variant(cls, value: Any) -> Any:
        if value is None or isinstance(value, (PlainPatterns, PositiveNegativePatterns)):
            return value
        if isinstance(value, list):
            return PlainPatterns(patterns=value)
        if isinstance(value, dict):
            return PositiveNegativePatterns(sections=value)
        raise ValueError(
            f"body must be a list of patterns or a positive/negative mapping, got {type(value).__name__}"
        )

    @field_validator("json_checks", mode="before")
    @classmethod
    def _json_list(cls, value: Any) -> Any:
        return value or []

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ResponseConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if isinstance(data, dict) and "response" in data:
            data = data["response"] or {}
        return cls.model_validate(data)
