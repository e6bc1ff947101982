"""
Operating system detection from /etc/os-release.

The family check is a case-insensitive keyword match over the whole file.
Field extraction deliberately handles only two value forms, quoted
(``ID="ubuntu"``) and bare (``ID=ubuntu``), terminated by the carriage
return a TTY exec session emits. Escaped quotes inside values are not
supported.
"""

import logging
from typing import Optional, Tuple

from containerguard.core.models import OSFamily, OSInfo
from containerguard.exceptions import UnsupportedOSError

logger = logging.getLogger(__name__)

# Checked in order; the first family with a matching keyword wins.
OS_FAMILY_KEYWORDS: Tuple[Tuple[OSFamily, Tuple[str, ...]], ...] = (
    (OSFamily.DEBIAN, ("debian", "ubuntu", "kali")),
    (OSFamily.RPM, ("rhel", "centos", "oraclelinux", "suse", "fedora")),
    (OSFamily.ALPINE, ("alpine",)),
)

ID_KEY = "ID="
VERSION_ID_KEY = "VERSION_ID="


def classify_os_family(os_release: str, container_id: Optional[str] = None) -> OSFamily:
    """
    Classify os-release text into an OS family.

    Args:
        os_release: Raw content of /etc/os-release
        container_id: Container the text came from, for error reporting

    Returns:
        The first OSFamily whose keywords occur in the text

    Raises:
        UnsupportedOSError: If no keyword matches. There is no fallback family.
    """
    text = os_release.lower()
    for family, keywords in OS_FAMILY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            logger.debug(f"Classified OS family as {family.value}")
            return family

    logger.error(f"Unrecognized os-release content: {os_release!r}")
    raise UnsupportedOSError(os_release, container_id=container_id)


def parse_os_release(os_release: str) -> OSInfo:
    """
    Extract the OS identifier and version from os-release text.

    The first occurrence of ``ID=`` is used as the name, which means a
    ``VERSION_ID=`` line placed before the ``ID=`` line is picked up instead.
    Missing keys yield empty strings.
    """
    return OSInfo(
        name=_field_value(os_release, ID_KEY),
        version=_field_value(os_release, VERSION_ID_KEY),
    )


def _field_value(text: str, key: str) -> str:
    index = text.find(key)
    if index < 0:
        return ""
    return _read_value(text[index + len(key):])


def _read_value(rest: str) -> str:
    """Read a quoted or bare value from the start of ``rest``."""
    if not rest:
        return ""

    if rest[0] == '"':
        end = rest.find('"', 1)
        if end < 0:
            end = _line_end(rest)
        return rest[1:end]

    return rest[:_line_end(rest)]


def _line_end(text: str) -> int:
    # Output without a TTY has no carriage returns
    ends = [end for end in (text.find("\r"), text.find("\n")) if end >= 0]
    return min(ends) if ends else len(text)
