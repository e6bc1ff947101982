"""
CLI output utilities with color support.

Status messages go to stderr so that the report on stdout can be piped.
"""

from enum import Enum

from rich.console import Console

from containerguard.core.models import ContainerScanResult, ScanStatus
from containerguard.reports.text_reporter import TextReporter


class OutputLevel(Enum):
    """Output verbosity levels."""
    QUIET = 0
    NORMAL = 1


STATUS_STYLES = {
    ScanStatus.CLEAN: "bold green",
    ScanStatus.VULNERABLE: "bold red",
    ScanStatus.ERROR: "yellow",
}


class CliOutput:
    """CLI output manager with color and formatting support."""

    def __init__(self, verbose: int = OutputLevel.NORMAL.value, no_color: bool = False):
        """
        Initialize CLI output.

        Args:
            verbose: Verbosity level (0=quiet, 1=normal)
            no_color: Disable colored output
        """
        self.verbose_level = OutputLevel(verbose)
        self.no_color = no_color
        self.console = Console(no_color=no_color, highlight=False, emoji=False, soft_wrap=True)
        self.err_console = Console(stderr=True, no_color=no_color, highlight=False, emoji=False, soft_wrap=True)
        self.reporter = TextReporter()

    def success(self, message: str):
        """Print success message in green."""
        if self.verbose_level.value < OutputLevel.NORMAL.value:
            return
        self.err_console.print(f"✓ {message}", style="bold green", markup=False)

    def error(self, message: str):
        """Print error message in red."""
        self.err_console.print(f"✗ {message}", style="bold red", markup=False)

    def warning(self, message: str):
        """Print warning message in yellow."""
        if self.verbose_level.value < OutputLevel.NORMAL.value:
            return
        self.err_console.print(f"! {message}", style="bold yellow", markup=False)

    def info(self, message: str):
        """Print info message."""
        if self.verbose_level.value < OutputLevel.NORMAL.value:
            return
        self.err_console.print(message, style="cyan", markup=False)

    def scan_result(self, result: ContainerScanResult):
        """Print the text report for one container."""
        for line in self.reporter.header_lines(result):
            self.console.print(line, markup=False)

        style = STATUS_STYLES.get(result.status, "")
        lines = self.reporter.finding_lines(result)
        self.console.print(lines[0], style=style, markup=False)
        for line in lines[1:]:
            self.console.print(line, markup=False)
        self.console.print()

    def raw(self, text: str):
        """Print text verbatim to stdout."""
        self.console.print(text, markup=False)

