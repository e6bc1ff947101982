"""
Scan orchestration for running containers.

Lists running containers and audits them one at a time:
- Detect the OS from /etc/os-release
- List installed packages with the family's package manager
- Audit the package list against Vulners
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

import docker
import requests
from docker.errors import DockerException
from docker.models.containers import Container

from containerguard.config import Config, get_config
from containerguard.containers.executor import ContainerExecutor, OS_RELEASE_COMMAND
from containerguard.containers.os_detection import classify_os_family, parse_os_release
from containerguard.containers.packages import PackageLister
from containerguard.core.models import ContainerScanResult, ScanStatus
from containerguard.exceptions import ContainerScanError, RuntimeConnectionError
from containerguard.vulners.client import VulnersClient, extract_findings

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ContainerScanResult], None]


class ContainerScanner:
    """
    Audits every running container on a Docker host.

    By default the first error aborts the whole run. With
    ``continue_on_error`` a per-container failure is recorded as an ERROR
    result and the remaining containers are still scanned.
    """

    def __init__(
        self,
        docker_client: Optional[docker.DockerClient] = None,
        vulners_client: Optional[VulnersClient] = None,
        config: Optional[Config] = None,
        continue_on_error: Optional[bool] = None,
    ):
        """
        Initialize scanner.

        Args:
            docker_client: Docker client; connects from the environment when omitted
            vulners_client: Vulners client; built from config when omitted
            config: Configuration, defaults to the global config
            continue_on_error: Override config.continue_on_error
        """
        self.config = config or get_config()
        self.continue_on_error = (
            self.config.continue_on_error if continue_on_error is None else continue_on_error
        )

        self.docker_client = docker_client or self._connect()
        self.vulners_client = vulners_client or VulnersClient(
            url=self.config.vulners_url,
            timeout=self.config.vulners_timeout,
            api_key=self.config.vulners_api_key,
        )
        self.executor = ContainerExecutor(self.docker_client)
        self.package_lister = PackageLister(self.executor)

    def _connect(self) -> docker.DockerClient:
        """Connect to Docker using DOCKER_HOST and related variables."""
        try:
            return docker.from_env()
        except (DockerException, requests.RequestException) as e:
            raise RuntimeConnectionError(f"Cannot connect to Docker: {e}") from e

    def list_containers(self) -> List[Container]:
        """List all running containers."""
        try:
            containers = self.docker_client.containers.list()
        except (DockerException, requests.RequestException) as e:
            raise RuntimeConnectionError(f"Cannot list containers: {e}") from e

        logger.info(f"Found {len(containers)} running containers")
        return containers

    def scan_all(self, on_result: Optional[ResultCallback] = None) -> List[ContainerScanResult]:
        """
        Scan all running containers sequentially.

        Args:
            on_result: Called with each result as soon as it is available

        Returns:
            One result per container, in listing order
        """
        results = []

        for container in self.list_containers():
            try:
                result = self.scan_container(container)
            except ContainerScanError as e:
                if not self.continue_on_error:
                    raise
                logger.error(f"Scan of container {container.short_id} failed: {e}")
                result = ContainerScanResult(
                    container_id=container.id,
                    container_name=container.name,
                    image=_image_name(container),
                    status=ScanStatus.ERROR,
                    error=str(e),
                )

            results.append(result)
            if on_result:
                on_result(result)

        return results

    def scan_container(self, container: Container) -> ContainerScanResult:
        """
        Scan a single container.

        Args:
            container: Running container from the Docker SDK

        Returns:
            ContainerScanResult with the audit outcome

        Raises:
            ContainerScanError: If the OS is unsupported, a command cannot be
                run, or Vulners cannot be reached
        """
        container_id = container.id
        logger.info(f"Scanning container {container.short_id} ({container.name})")

        os_release = self.executor.execute(container_id, OS_RELEASE_COMMAND)
        family = classify_os_family(os_release, container_id=container_id)
        packages = self.package_lister.list_packages(container_id, family)
        os_info = parse_os_release(os_release)
        logger.info(f"Container {container.short_id} runs {os_info} ({family.value})")

        request = self.vulners_client.build_request(os_info.name, os_info.version, packages)
        try:
            response = self.vulners_client.audit(request)
        except ContainerScanError as e:
            e.container_id = container_id
            raise
        outcome = extract_findings(response)

        logger.info(
            f"Container {container.short_id}: {outcome.status.value}, "
            f"{len(outcome.cves)} CVEs, {len(outcome.bulletin_ids)} bulletins"
        )

        return ContainerScanResult(
            container_id=container_id,
            container_name=container.name,
            image=_image_name(container),
            status=outcome.status,
            os_info=os_info,
            family=family,
            packages=packages,
            cves=outcome.cves,
            bulletin_ids=outcome.bulletin_ids,
            error=outcome.error,
            timestamp=datetime.now(timezone.utc),
        )


def _image_name(container: Container) -> str:
    """Image reference the container was started from."""
    attrs = container.attrs or {}
    return (attrs.get('Config') or {}).get('Image') or attrs.get('Image') or ''
