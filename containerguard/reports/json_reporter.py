"""
JSON reporter for ContainerGuard.
"""

import json
import logging
from typing import List

from containerguard.core.models import ContainerScanResult

logger = logging.getLogger(__name__)


class JSONReporter:
    """JSON report generator."""

    def __init__(self, pretty: bool = True):
        """Initialize JSON reporter with optional pretty printing."""
        self.pretty = pretty

    def render(self, results: List[ContainerScanResult]) -> str:
        """Render scan results as a JSON array."""
        data = [result.to_dict() for result in results]
        if self.pretty:
            return json.dumps(data, indent=2, default=str)
        return json.dumps(data, default=str)

    def save_report(self, results: List[ContainerScanResult], output_path: str) -> None:
        """Save scan results as JSON."""
        logger.info(f"Generating JSON report: {output_path}")

        with open(output_path, 'w') as f:
            f.write(self.render(results))
            f.write('\n')

        logger.info(f"JSON report saved: {output_path}")
