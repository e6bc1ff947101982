"""
Container inspection module for ContainerGuard.

Runs commands inside running containers to detect their OS and list
installed packages.
"""

from containerguard.containers.executor import ContainerExecutor, OS_RELEASE_COMMAND
from containerguard.containers.os_detection import classify_os_family, parse_os_release
from containerguard.containers.packages import PackageLister, package_command, parse_package_output

__all__ = [
    'ContainerExecutor',
    'OS_RELEASE_COMMAND',
    'classify_os_family',
    'parse_os_release',
    'PackageLister',
    'package_command',
    'parse_package_output',
]
