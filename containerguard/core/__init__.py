"""Core data models and scan orchestration."""

from containerguard.core.models import (
    OSFamily,
    OSInfo,
    ScanRequest,
    ScanResponse,
    ScanStatus,
    ContainerScanResult,
)

__all__ = [
    "OSFamily",
    "OSInfo",
    "ScanRequest",
    "ScanResponse",
    "ScanStatus",
    "ContainerScanResult",
]
