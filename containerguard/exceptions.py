"""
Exception hierarchy for ContainerGuard.

Every exception here is fatal to a scan run unless the orchestrator is
configured to isolate per-container failures.
"""

from typing import Optional


class ContainerGuardError(Exception):
    """Base class for all ContainerGuard errors."""


class RuntimeConnectionError(ContainerGuardError):
    """The container runtime could not be reached or queried."""


class ContainerScanError(ContainerGuardError):
    """A failure while scanning a single container."""

    def __init__(self, message: str, container_id: Optional[str] = None):
        super().__init__(message)
        self.container_id = container_id


class UnsupportedOSError(ContainerScanError):
    """The os-release text did not match any known OS family."""

    def __init__(self, os_release: str, container_id: Optional[str] = None):
        super().__init__(
            f"Can't determine type of OS or OS is not supported: {os_release!r}",
            container_id=container_id,
        )
        self.os_release = os_release


class CommandExecutionError(ContainerScanError):
    """An exec session inside a container could not be created or attached."""


class VulnersAPIError(ContainerScanError):
    """Transport or decoding failure talking to the Vulners audit API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        container_id: Optional[str] = None,
    ):
        super().__init__(message, container_id=container_id)
        self.status_code = status_code
