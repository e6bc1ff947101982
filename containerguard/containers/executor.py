"""
Command execution inside running containers.

Each call opens a fresh exec session with a pseudo-terminal and both output
streams attached, so stdout and stderr arrive interleaved and lines end in
``\\r\\n``.
"""

import logging
from typing import List, Sequence

import docker
import requests
from docker.errors import DockerException

from containerguard.exceptions import CommandExecutionError

logger = logging.getLogger(__name__)

OS_RELEASE_COMMAND: List[str] = ["cat", "/etc/os-release"]


class ContainerExecutor:
    """Runs commands in containers through the Docker Engine API."""

    def __init__(self, client: docker.DockerClient):
        """
        Initialize executor.

        Args:
            client: Connected Docker client
        """
        self.client = client

    def execute(self, container_id: str, cmd: Sequence[str]) -> str:
        """
        Run a command to completion and return its combined output.

        Args:
            container_id: Target container ID
            cmd: Argument vector, not passed through a shell

        Returns:
            Combined stdout/stderr decoded as UTF-8

        Raises:
            CommandExecutionError: If the exec session cannot be created or started
        """
        logger.debug(f"Executing {list(cmd)} in container {container_id[:12]}")

        try:
            exec_instance = self.client.api.exec_create(
                container_id,
                list(cmd),
                stdout=True,
                stderr=True,
                tty=True,
            )
            output = self.client.api.exec_start(exec_instance['Id'], tty=True)
        except (DockerException, requests.RequestException) as e:
            raise CommandExecutionError(
                f"Failed to execute {' '.join(cmd)!r} in container {container_id}: {e}",
                container_id=container_id,
            ) from e

        if isinstance(output, bytes):
            return output.decode('utf-8', errors='replace')
        return output or ''
