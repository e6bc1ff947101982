"""
Scan command implementation.
"""

import dataclasses
import logging
from typing import List, Optional

from containerguard.cli.output import CliOutput, OutputLevel
from containerguard.config import Config
from containerguard.core.models import ContainerScanResult, ScanStatus
from containerguard.core.scanner import ContainerScanner
from containerguard.exceptions import ContainerGuardError, ContainerScanError
from containerguard.reports import JSONReporter, TextReporter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_VULNERABLE = 2


def execute_scan(
    config: Config,
    output_format: str = "text",
    output_path: Optional[str] = None,
    continue_on_error: Optional[bool] = None,
    fail_on_vulnerable: bool = False,
    vulners_url: Optional[str] = None,
    timeout: Optional[float] = None,
    no_color: bool = False,
    quiet: bool = False,
    scanner: Optional[ContainerScanner] = None,
) -> int:
    """
    Run a scan of all running containers and emit the report.

    Text reports on stdout are streamed container by container. JSON reports
    and reports written to a file are emitted once the scan finishes.

    Returns:
        Process exit code
    """
    output = CliOutput(
        verbose=OutputLevel.QUIET.value if quiet else OutputLevel.NORMAL.value,
        no_color=no_color,
    )

    overrides = {}
    if vulners_url:
        overrides["vulners_url"] = vulners_url
    if timeout is not None:
        overrides["vulners_timeout"] = timeout

    stream = output_format == "text" and not output_path

    if overrides:
        try:
            config = dataclasses.replace(config, **overrides)
        except ValueError as e:
            output.error(f"Invalid configuration: {e}")
            return EXIT_FATAL

    try:
        if scanner is None:
            scanner = ContainerScanner(config=config, continue_on_error=continue_on_error)
        results = scanner.scan_all(on_result=output.scan_result if stream else None)
    except ContainerScanError as e:
        logger.error(f"Scan of container {e.container_id} failed: {e}")
        output.error(f"Scan failed for container {e.container_id}: {e}")
        return EXIT_FATAL
    except ContainerGuardError as e:
        logger.error(f"Scan failed: {e}")
        output.error(f"Scan failed: {e}")
        return EXIT_FATAL

    if not stream:
        reporter = _reporter(output_format)
        if output_path:
            reporter.save_report(results, output_path)
            output.success(f"Report saved to: {output_path}")
        else:
            output.raw(reporter.render(results))

    return _summarize(results, output, fail_on_vulnerable)


def _reporter(output_format: str):
    if output_format == "json":
        return JSONReporter()
    return TextReporter()


def _summarize(
    results: List[ContainerScanResult],
    output: CliOutput,
    fail_on_vulnerable: bool,
) -> int:
    vulnerable = [r for r in results if r.status == ScanStatus.VULNERABLE]
    errors = [r for r in results if r.status == ScanStatus.ERROR]

    if not results:
        output.info("No running containers found")
    elif vulnerable:
        output.warning(
            f"Scan complete: {len(vulnerable)} of {len(results)} containers have vulnerabilities"
        )
    else:
        output.success(f"Scan complete: {len(results)} containers scanned")

    if errors:
        output.warning(f"{len(errors)} containers could not be audited")

    if fail_on_vulnerable and vulnerable:
        return EXIT_VULNERABLE
    return EXIT_OK
