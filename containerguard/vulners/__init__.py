"""
Vulners audit API integration.
"""

from containerguard.vulners.client import VulnersClient, extract_findings

__all__ = ['VulnersClient', 'extract_findings']
