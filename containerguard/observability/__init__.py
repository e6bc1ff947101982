"""
Observability module for ContainerGuard.
"""

from containerguard.observability.logging import setup_logging

__all__ = ['setup_logging']
