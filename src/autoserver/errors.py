"""Domain errors for AutoServer."""

from typing import List, Optional


class ProvisionerError(RuntimeError):
    """Raised when provisioning cannot continue safely."""

    stage: Optional[str] = None


class PrivilegeError(ProvisionerError):
    """Raised when the process does not run with administrative privileges."""


class CredentialError(ProvisionerError):
    """Raised when a secure credential cannot be generated."""


class ExternalCommandError(ProvisionerError):
    """Raised when an external tool exits with a non-success status."""

    def __init__(
        self,
        message: str,
        cmd: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        output: str = "",
    ):
        super().__init__(message)
        self.cmd = list(cmd or [])
        self.returncode = returncode
        self.output = output


class ConfigurationValidationError(ExternalCommandError):
    """Raised when nginx rejects a freshly written configuration."""
