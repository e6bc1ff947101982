"""
Tests for package enumeration.
"""

import pytest

from containerguard.containers.executor import ContainerExecutor
from containerguard.containers.packages import (
    PackageLister,
    package_command,
    parse_package_output,
)
from containerguard.core.models import OSFamily

from conftest import APK_OUTPUT, DPKG_OUTPUT, make_docker_client


class TestPackageCommand:
    """Test command selection per OS family."""

    def test_debian_command(self):
        assert package_command(OSFamily.DEBIAN) == [
            "dpkg-query", "-W", "-f=${Package} ${Version} ${Architecture}\n"
        ]

    def test_rpm_command(self):
        assert package_command(OSFamily.RPM) == ["rpm", "-qa"]

    def test_alpine_command(self):
        assert package_command(OSFamily.ALPINE) == ["apk", "-v", "info"]

    def test_command_is_a_copy(self):
        """Test callers cannot modify the command table."""
        command = package_command(OSFamily.RPM)
        command.append("--last")
        assert package_command(OSFamily.RPM) == ["rpm", "-qa"]


class TestParsePackageOutput:
    """Test line parsing of package-manager output."""

    def test_debian_output(self):
        packages = parse_package_output(DPKG_OUTPUT, OSFamily.DEBIAN)
        assert packages == [
            "adduser 3.118ubuntu2 all",
            "curl 7.68.0-1ubuntu2.20 amd64",
        ]

    def test_rpm_output_preserves_order(self):
        output = "zlib-1.2.7-21.el7_9.x86_64\r\nbash-4.2.46-35.el7_9.x86_64\r\n"
        packages = parse_package_output(output, OSFamily.RPM)
        assert packages == ["zlib-1.2.7-21.el7_9.x86_64", "bash-4.2.46-35.el7_9.x86_64"]

    def test_alpine_warnings_are_dropped(self):
        packages = parse_package_output(APK_OUTPUT, OSFamily.ALPINE)
        assert packages == ["musl-1.2.4-r2", "busybox-1.36.1-r5"]
        assert not any("WARNING" in p for p in packages)

    def test_warning_lines_kept_for_other_families(self):
        """Test the WARNING filter only applies to Alpine."""
        output = "WARNING-tools 1.0 amd64\r\n"
        assert parse_package_output(output, OSFamily.DEBIAN) == ["WARNING-tools 1.0 amd64"]

    def test_empty_lines_are_dropped(self):
        assert parse_package_output("\r\n\r\nbash 5.1 amd64\r\n\r\n", OSFamily.DEBIAN) == [
            "bash 5.1 amd64"
        ]

    def test_empty_output(self):
        assert parse_package_output("", OSFamily.RPM) == []


class TestPackageLister:
    """Test package listing through the executor."""

    @pytest.mark.parametrize("family,output,expected_count", [
        (OSFamily.DEBIAN, DPKG_OUTPUT, 2),
        (OSFamily.ALPINE, APK_OUTPUT, 2),
        (OSFamily.RPM, "openssl-1.0.2k-26.el7_9.x86_64\r\n", 1),
    ])
    def test_list_packages(self, family, output, expected_count):
        client = make_docker_client({tuple(package_command(family)): output})
        lister = PackageLister(ContainerExecutor(client))

        packages = lister.list_packages("c0ffee", family)

        assert len(packages) == expected_count
        _, cmd = client.api.exec_create.call_args[0]
        assert cmd == package_command(family)
