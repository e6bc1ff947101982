"""
Plain text reporter for ContainerGuard.

Produces the per-container report printed during a scan: container ID,
detected OS, then the Vulners error, a clean message, or the CVE and
bulletin lists.
"""

import logging
from typing import List

from containerguard.core.models import ContainerScanResult, ScanStatus

logger = logging.getLogger(__name__)

CLEAN_MESSAGE = "Container is clean, congratulations!"
VULNERABLE_MESSAGE = "Vulnerabilities were found!"


class TextReporter:
    """Plain text report generator."""

    def header_lines(self, result: ContainerScanResult) -> List[str]:
        lines = [f"For container with ID: {result.container_id}"]
        if result.os_info:
            lines.append(f"OS: {result.os_info}")
        return lines

    def finding_lines(self, result: ContainerScanResult) -> List[str]:
        """Lines describing the audit outcome of one container."""
        if result.status == ScanStatus.ERROR:
            return [f"Vulners error: {result.error or 'unknown error'}"]

        if result.status == ScanStatus.CLEAN:
            return [CLEAN_MESSAGE]

        lines = [VULNERABLE_MESSAGE]
        if result.cves:
            lines.append("List of CVE:")
            lines.extend(result.cves)
        if result.bulletin_ids:
            lines.append("List of Bulletin ID:")
            lines.extend(result.bulletin_ids)
        return lines

    def render_result(self, result: ContainerScanResult) -> str:
        return "\n".join(self.header_lines(result) + self.finding_lines(result))

    def render(self, results: List[ContainerScanResult]) -> str:
        """Render all results, separated by blank lines."""
        return "\n\n".join(self.render_result(result) for result in results)

    def save_report(self, results: List[ContainerScanResult], output_path: str) -> None:
        """Save scan results as plain text."""
        logger.info(f"Generating text report: {output_path}")

        with open(output_path, 'w') as f:
            f.write(self.render(results))
            f.write('\n')

        logger.info(f"Text report saved: {output_path}")
