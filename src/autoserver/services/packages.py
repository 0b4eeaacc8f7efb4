"""APT package provisioning for AutoServer."""

import os
from typing import Callable, List

from autoserver.constants import (
    PHPMYADMIN_DEBCONF_SELECTION,
    PHPMYADMIN_LINK_NAME,
    PHPMYADMIN_SOURCE_DIR,
)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}

PHP_EXTENSIONS = ("fpm", "mysql", "cli", "curl", "xml", "mbstring", "zip", "bcmath")
PHP_SHARED_PACKAGES = ("php-json", "php-common")


def core_packages() -> List[str]:
    return ["nginx", "mariadb-server", "mariadb-client"]


def php_packages(php_version: str) -> List[str]:
    """PHP-FPM for ``php_version`` plus its common extensions."""
    versioned = [f"php{php_version}-{extension}" for extension in PHP_EXTENSIONS]
    return versioned + list(PHP_SHARED_PACKAGES)


def admin_panel_packages() -> List[str]:
    return ["phpmyadmin"]


class PackageService:
    """Drives apt-get and debconf; every call aborts the run on failure."""

    def __init__(self, logger, console, run_cmd: Callable):
        self.logger = logger
        self.console = console
        self.run_cmd = run_cmd

    def _apt(self, args: List[str]):
        self.run_cmd(["apt-get"] + args, env=APT_ENV)

    def update_index(self):
        self.logger.info("Refreshing package index...")
        self._apt(["update"])

    def upgrade(self):
        self.logger.info("Upgrading installed packages...")
        self._apt(["upgrade", "-y"])

    def install(self, packages: List[str], no_install_recommends: bool = False):
        args = ["install", "-y"]
        if no_install_recommends:
            args.append("--no-install-recommends")
        self.logger.info("Installing: %s", " ".join(packages))
        self._apt(args + list(packages))

    def preseed(self, selection: str):
        self.logger.debug("Pre-seeding debconf: %s", selection)
        self.run_cmd(["debconf-set-selections"], input_text=f"{selection}\n")

    def update_system(self):
        self.console.print("[blue]Updating package index and installed packages...[/blue]")
        self.update_index()
        self.upgrade()

    def install_stack(self, php_version: str):
        self.console.print(
            f"[blue]Installing nginx, MariaDB and PHP {php_version}...[/blue]"
        )
        self.install(core_packages())
        self.install(php_packages(php_version))

    def install_admin_panel(self, web_root: str, filesystem_service):
        """Install phpMyAdmin without apache2 and expose it under ``web_root``."""
        self.console.print("[blue]Installing phpMyAdmin...[/blue]")
        self.preseed(PHPMYADMIN_DEBCONF_SELECTION)
        self.install(admin_panel_packages(), no_install_recommends=True)
        filesystem_service.ensure_symlink(
            PHPMYADMIN_SOURCE_DIR,
            os.path.join(web_root, PHPMYADMIN_LINK_NAME),
        )
