"""
Core data models for ContainerGuard.

This module defines the data structures exchanged between the OS classifier,
the package lister, the Vulners client and the reporters.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class OSFamily(str, Enum):
    """Package-manager families recognized in /etc/os-release."""
    DEBIAN = "debian"
    RPM = "rpm"
    ALPINE = "alpine"


class ScanStatus(str, Enum):
    """Outcome of auditing one container."""
    CLEAN = "clean"
    VULNERABLE = "vulnerable"
    ERROR = "error"


@dataclass(frozen=True)
class OSInfo:
    """Normalized OS identifier and version taken from os-release."""
    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name} {self.version}"


@dataclass
class ScanRequest:
    """
    Body of a Vulners audit request.

    Attributes:
        os: OS identifier (value of ID in os-release)
        version: OS version (value of VERSION_ID in os-release)
        packages: Package descriptors in package-manager output order
        api_key: Optional Vulners API key sent as ``apiKey``
    """
    os: str
    version: str
    packages: List[str] = field(default_factory=list)
    api_key: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the JSON body expected by the audit endpoint."""
        payload: Dict[str, Any] = {
            "os": self.os,
            "version": self.version,
            "package": list(self.packages),
        }
        if self.api_key:
            payload["apiKey"] = self.api_key
        return payload


@dataclass
class Reason:
    """A package/bulletin mismatch reported by Vulners."""
    package: str = ""
    provided_version: str = ""
    bulletin_version: str = ""
    provided_package: str = ""
    bulletin_package: str = ""
    operator: str = ""
    bulletin_id: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reason":
        return cls(
            package=data.get("package") or "",
            provided_version=data.get("providedVersion") or "",
            bulletin_version=data.get("bulletinVersion") or "",
            provided_package=data.get("providedPackage") or "",
            bulletin_package=data.get("bulletinPackage") or "",
            operator=data.get("operator") or "",
            bulletin_id=data.get("bulletinID") or "",
        )


@dataclass
class Cvss:
    """Aggregate CVSS score for an audit."""
    score: float = 0.0
    vector: str = ""


@dataclass
class ScanResponse:
    """
    Decoded Vulners audit response.

    Missing keys decode to empty values so a partial envelope still maps to
    a well-formed response.
    """
    result: str
    error: str = ""
    error_code: int = 0
    vulnerabilities: List[str] = field(default_factory=list)
    reasons: List[Reason] = field(default_factory=list)
    cvss: Cvss = field(default_factory=Cvss)
    cvelist: List[str] = field(default_factory=list)
    id: str = ""

    @property
    def ok(self) -> bool:
        return self.result == "OK"

    @classmethod
    def from_dict(cls, body: Dict[str, Any]) -> "ScanResponse":
        """Build a response from the decoded JSON envelope."""
        data = body.get("data") or {}
        cvss = data.get("cvss") or {}
        return cls(
            result=body.get("result") or "",
            error=data.get("error") or "",
            error_code=int(data.get("errorCode") or 0),
            vulnerabilities=list(data.get("vulnerabilities") or []),
            reasons=[Reason.from_dict(r) for r in data.get("reasons") or []],
            cvss=Cvss(
                score=float(cvss.get("score") or 0.0),
                vector=cvss.get("vector") or "",
            ),
            cvelist=list(data.get("cvelist") or []),
            id=data.get("id") or "",
        )


@dataclass
class AuditOutcome:
    """Flattened result of a Vulners audit."""
    status: ScanStatus
    cves: List[str] = field(default_factory=list)
    bulletin_ids: List[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class ContainerScanResult:
    """
    Complete result of scanning one running container.

    Attributes:
        container_id: Full container ID
        container_name: Container name as reported by the runtime
        image: First image tag, or image ID when untagged
        status: Audit outcome
        os_info: Detected OS, None when the scan failed before detection
        family: Detected OS family
        packages: Package descriptors sent to Vulners
        cves: CVE identifiers reported by Vulners
        bulletin_ids: Bulletin identifiers from the audit reasons
        error: Vulners error message or isolated failure description
        timestamp: When the scan finished
    """
    container_id: str
    container_name: str
    image: str
    status: ScanStatus
    os_info: Optional[OSInfo] = None
    family: Optional[OSFamily] = None
    packages: List[str] = field(default_factory=list)
    cves: List[str] = field(default_factory=list)
    bulletin_ids: List[str] = field(default_factory=list)
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def package_count(self) -> int:
        return len(self.packages)

    def to_dict(self) -> Dict[str, Any]:
        """Convert scan result to dictionary representation."""
        return {
            "container_id": self.container_id,
            "container_name": self.container_name,
            "image": self.image,
            "status": self.status.value,
            "os": self.os_info.name if self.os_info else None,
            "os_version": self.os_info.version if self.os_info else None,
            "family": self.family.value if self.family else None,
            "package_count": self.package_count,
            "cves": self.cves,
            "bulletin_ids": self.bulletin_ids,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
        }
