"""Shared domain models for AutoServer."""

from dataclasses import dataclass, field

from autoserver.constants import PHP_FPM_SERVICE_TEMPLATE, PHP_FPM_SOCKET_TEMPLATE


@dataclass(frozen=True)
class ProvisionConfig:
    """Process-wide settings resolved once at start and never mutated."""

    php_version: str
    web_root: str
    db_root_password: str = field(repr=False)

    @property
    def php_fpm_service(self) -> str:
        return PHP_FPM_SERVICE_TEMPLATE.format(version=self.php_version)

    @property
    def php_fpm_socket(self) -> str:
        return PHP_FPM_SOCKET_TEMPLATE.format(version=self.php_version)
