"""
AutoServer - unattended LEMP stack provisioning for Debian-family hosts
"""

__version__ = "1.0.0"

from .core import AutoServer, ProvisionerError

__all__ = ["AutoServer", "ProvisionerError"]
