"""
Installed package enumeration for the supported OS families.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Tuple

from containerguard.containers.executor import ContainerExecutor
from containerguard.core.models import OSFamily

logger = logging.getLogger(__name__)

PACKAGE_COMMANDS: Mapping[OSFamily, Tuple[str, ...]] = MappingProxyType({
    OSFamily.DEBIAN: ("dpkg-query", "-W", "-f=${Package} ${Version} ${Architecture}\n"),
    OSFamily.RPM: ("rpm", "-qa"),
    OSFamily.ALPINE: ("apk", "-v", "info"),
})

# apk interleaves warnings with the package list under a TTY
ALPINE_NOISE_MARKER = "WARNING"

LINE_SEPARATOR = "\r\n"


def package_command(family: OSFamily) -> List[str]:
    """Return the package-listing argument vector for an OS family."""
    return list(PACKAGE_COMMANDS[family])


def parse_package_output(output: str, family: OSFamily) -> List[str]:
    """
    Split package-manager output into package descriptors.

    Empty lines are dropped, and for Alpine so is every line containing
    ``WARNING``. Order follows the command output.
    """
    packages = []
    for line in output.split(LINE_SEPARATOR):
        if not line:
            continue
        if family == OSFamily.ALPINE and ALPINE_NOISE_MARKER in line:
            continue
        packages.append(line)
    return packages


class PackageLister:
    """Lists installed packages inside a container."""

    def __init__(self, executor: ContainerExecutor):
        self.executor = executor

    def list_packages(self, container_id: str, family: OSFamily) -> List[str]:
        """
        Run the family's package command in a container and parse the output.

        Args:
            container_id: Target container ID
            family: Previously classified OS family

        Returns:
            Package descriptors in output order
        """
        output = self.executor.execute(container_id, package_command(family))
        packages = parse_package_output(output, family)
        logger.info(f"Found {len(packages)} packages in container {container_id[:12]}")
        return packages
