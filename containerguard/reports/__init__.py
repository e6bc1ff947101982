"""
Report generation module for ContainerGuard.

Provides plain text and JSON renderings of container scan results.
"""

from containerguard.reports.json_reporter import JSONReporter
from containerguard.reports.text_reporter import TextReporter

__all__ = ['JSONReporter', 'TextReporter']
