"""Shared test fixtures."""

from typing import Callable, Dict, Optional

import httpx
import pytest

from upcheck.config import ResponseConfig
from upcheck.core import Validator, make_validator


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Factory for in-memory httpx responses."""

    def _make(
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
        text: str = "",
    ) -> httpx.Response:
        return httpx.Response(status_code, headers=headers, text=text)

    return _make


@pytest.fixture
def build_validator() -> Callable[..., Validator]:
    """Build a Validator from raw configuration data."""

    def _build(**data) -> Validator:
        return make_validator(ResponseConfig.model_validate(data))

    return _build
