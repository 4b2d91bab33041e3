"""Single HTTP probe execution on top of a Validator."""

import time
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from upcheck.core.reason import Reason
from upcheck.core.validators import Validator
from upcheck.utils import logger


@dataclass
class ProbeResult:
    """Result of one probe."""

    url: str
    up: bool
    status_code: Optional[int] = None
    reason: Optional[Reason] = None
    duration_ms: float = 0.0


def run_probe(
    url: str,
    validator: Validator,
    method: str = "GET",
    timeout: float = 10.0,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> ProbeResult:
    """Send one request and validate the response.

    The body is only read when the validator has body checks. Transport
    errors are reported as an io Reason instead of being raised.
    """
    start = time.time()
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as client:
            with client.stream(method.upper(), url, headers=headers) as response:
                body = ""
                if validator.wants_body():
                    response.read()
                    body = response.text
                reason = validator.validate(response, body)
    except httpx.HTTPError as e:
        logger.debug(f"HTTP error during probe of {url}: {e}")
        return ProbeResult(
            url=url,
            up=False,
            reason=Reason.io_failed(e),
            duration_ms=(time.time() - start) * 1000,
        )

    return ProbeResult(
        url=url,
        up=reason is None,
        status_code=response.status_code,
        reason=reason,
        duration_ms=(time.time() - start) * 1000,
    )
