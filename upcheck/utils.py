"""Utility functions for upcheck."""

import logging
from decimal import Decimal
from typing import Any


# Configure logging
def setup_logging(verbose: bool = False) -> None:
    """Configure logging for upcheck.

    Args:
        verbose: Enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Suppress noisy httpx logging
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.setLevel(level)


logger = logging.getLogger("upcheck")


def _normalize_number(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        transform_numbers(value)
    elif isinstance(value, list):
        for i, item in enumerate(value):
            value[i] = _normalize_number(item)
    return value


def transform_numbers(document: dict) -> None:
    """Convert Decimal values decoded from JSON to float, in place.

    Integers are left alone since ``json`` already decodes them to ``int``
    without loss.
    """
    for key, value in document.items():
        document[key] = _normalize_number(value)
