"""
ContainerGuard: vulnerability audit for running containers

Detects the operating system and installed packages of every running
container and checks them against the Vulners audit API.
"""

__version__ = "0.1.0"
__author__ = "ContainerGuard Contributors"
