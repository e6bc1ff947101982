"""
Vulners audit API client.

Posts an OS name, version and package list to the Vulners audit endpoint
and maps the reply to a clean / vulnerable / error outcome.
"""

import json
import logging
from typing import Optional

import requests

from containerguard.config import DEFAULT_VULNERS_TIMEOUT, DEFAULT_VULNERS_URL
from containerguard.core.models import AuditOutcome, ScanRequest, ScanResponse, ScanStatus
from containerguard.exceptions import VulnersAPIError

logger = logging.getLogger(__name__)


class VulnersClient:
    """Client for the Vulners package audit endpoint."""

    def __init__(
        self,
        url: str = DEFAULT_VULNERS_URL,
        timeout: float = DEFAULT_VULNERS_TIMEOUT,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize Vulners client.

        Args:
            url: Audit endpoint URL
            timeout: Request timeout in seconds
            api_key: Optional Vulners API key
            session: HTTP session to reuse across audits
        """
        self.url = url
        self.timeout = timeout
        self.api_key = api_key
        self.session = session or requests.Session()

    def build_request(self, os_name: str, version: str, packages) -> ScanRequest:
        """Create an audit request carrying the configured API key."""
        return ScanRequest(
            os=os_name,
            version=version,
            packages=list(packages),
            api_key=self.api_key,
        )

    def audit(self, request: ScanRequest) -> ScanResponse:
        """
        Send an audit request. No retries are attempted.

        Args:
            request: OS and package list to audit

        Returns:
            Decoded ScanResponse, whatever its ``result``

        Raises:
            VulnersAPIError: On transport errors, timeouts or a body that is
                not a JSON object
        """
        logger.info(
            f"Auditing {len(request.packages)} packages for "
            f"{request.os} {request.version}"
        )

        try:
            # Leaving the block releases the connection back to the pool
            with self.session.post(
                self.url, json=request.to_payload(), timeout=self.timeout
            ) as response:
                status_code = response.status_code
                raw = response.content
        except requests.RequestException as e:
            raise VulnersAPIError(f"Vulners request failed: {e}") from e

        try:
            body = json.loads(raw)
        except ValueError as e:
            raise VulnersAPIError(
                f"Vulners returned an undecodable response (HTTP {status_code}): {e}",
                status_code=status_code,
            ) from e

        if not isinstance(body, dict):
            raise VulnersAPIError(
                f"Vulners returned unexpected JSON (HTTP {status_code}): {type(body).__name__}",
                status_code=status_code,
            )

        try:
            return ScanResponse.from_dict(body)
        except (ValueError, TypeError, AttributeError) as e:
            raise VulnersAPIError(
                f"Vulners returned a malformed response (HTTP {status_code}): {e}",
                status_code=status_code,
            ) from e


def extract_findings(response: ScanResponse) -> AuditOutcome:
    """
    Flatten a Vulners response into an audit outcome.

    A ``result`` other than ``OK`` is a service-level error: it is logged and
    returned as an ERROR outcome rather than raised.
    """
    if not response.ok:
        logger.warning(f"Vulners error: {response.error} (code {response.error_code})")
        return AuditOutcome(status=ScanStatus.ERROR, error=response.error)

    if not response.cvelist and not response.reasons:
        return AuditOutcome(status=ScanStatus.CLEAN)

    return AuditOutcome(
        status=ScanStatus.VULNERABLE,
        cves=list(response.cvelist),
        bulletin_ids=[reason.bulletin_id for reason in response.reasons],
    )
