import logging
import os
import secrets
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

from .constants import (
    DATABASE_SERVICE,
    DEFAULT_PHP_VERSION,
    DEFAULT_WEB_ROOT,
    EXIT_FAILURE,
    EXIT_PRIVILEGE_ERROR,
    EXIT_SUCCESS,
    NGINX_SITE_PATH,
    PROXY_SERVICE,
)
from .errors import ExternalCommandError, PrivilegeError, ProvisionerError
from .errors_catalog import actionable_error
from .models import ProvisionConfig
from .services.command_runner import CommandRunner
from .services.config_loader import normalize_php_version
from .services.credentials import generate_password
from .services.database import DatabaseService, MariaDBClient
from .services.filesystem import FileSystemService
from .services.nginx import NginxConfigurator
from .services.packages import PackageService
from .services.privileges import PrivilegeService
from .services.report import ReportService
from .services.systemd import ServiceManager

console = Console()
logger = logging.getLogger("autoserver")

UNSAFE_WEB_ROOT_CHARS = set(";{}#$'\"\\")


class AutoServer:
    """Provisions nginx, MariaDB, PHP-FPM and phpMyAdmin on the local host.

    Stages run strictly in order and the first failure ends the run. Nothing
    is rolled back.
    """

    def __init__(
        self,
        php_version: str = DEFAULT_PHP_VERSION,
        web_root: str = DEFAULT_WEB_ROOT,
        credentials_file: Optional[str] = None,
        nginx_site_path: str = NGINX_SITE_PATH,
        command_runner: Optional[CommandRunner] = None,
        geteuid: Callable[[], int] = os.geteuid,
        token_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ):
        self.php_version = normalize_php_version(php_version)
        self.web_root = self._normalize_web_root(web_root)
        self.credentials_file = credentials_file
        self.token_bytes = token_bytes

        self.config: Optional[ProvisionConfig] = None
        self.current_stage: Optional[str] = None
        self.completed_stages: List[str] = []

        self.command_runner = command_runner or CommandRunner(logger=logger)
        self.filesystem_service = FileSystemService(logger=logger, console=console)
        self.privilege_service = PrivilegeService(logger=logger, geteuid=geteuid)
        self.package_service = PackageService(
            logger=logger,
            console=console,
            run_cmd=self._run_cmd,
        )
        self.service_manager = ServiceManager(logger=logger, console=console, run_cmd=self._run_cmd)
        self.database_service = DatabaseService(
            logger=logger,
            console=console,
            service_manager=self.service_manager,
            client=MariaDBClient(logger=logger, run_cmd=self._run_cmd),
        )
        self.nginx_configurator = NginxConfigurator(
            logger=logger,
            console=console,
            filesystem_service=self.filesystem_service,
            run_cmd=self._run_cmd,
            site_path=nginx_site_path,
        )
        self.report_service = ReportService(
            logger=logger,
            console=console,
            filesystem_service=self.filesystem_service,
        )

    def _normalize_web_root(self, value: str) -> str:
        clean_value = str(value).strip()
        if not os.path.isabs(clean_value):
            raise ProvisionerError(actionable_error("relative_web_root", value=clean_value))
        # The path lands unquoted in the nginx `root` directive.
        if any(char.isspace() or char in UNSAFE_WEB_ROOT_CHARS for char in clean_value):
            raise ProvisionerError(actionable_error("unsafe_web_root", value=clean_value))
        return os.path.normpath(clean_value)

    def _run_cmd(self, cmd: List[str], **kwargs):
        return self.command_runner.run(cmd, **kwargs)

    def _run_stage(self, name: str, callback, *args, **kwargs):
        self.current_stage = name
        logger.debug("Entering stage: %s", name)
        try:
            result = callback(*args, **kwargs)
        except ProvisionerError as exc:
            if exc.stage is None:
                exc.stage = name
            raise
        self.completed_stages.append(name)
        self.current_stage = None
        return result

    def managed_services(self) -> List[str]:
        return [DATABASE_SERVICE, self.config.php_fpm_service, PROXY_SERVICE]

    def check_privileges(self):
        self.privilege_service.ensure_root()

    def resolve_configuration(self) -> ProvisionConfig:
        return ProvisionConfig(
            php_version=self.php_version,
            web_root=self.web_root,
            db_root_password=generate_password(self.token_bytes),
        )

    def update_packages(self):
        self.package_service.update_system()

    def install_packages(self):
        self.package_service.install_stack(self.config.php_version)
        self.package_service.install_admin_panel(self.config.web_root, self.filesystem_service)

    def harden_database(self):
        self.database_service.harden(self.config.db_root_password)

    def configure_proxy(self):
        self.nginx_configurator.configure(self.config)

    def activate_services(self):
        self.service_manager.activate(self.managed_services())

    def report(self):
        self.report_service.emit(self.config, credentials_file=self.credentials_file)

    def provision(self) -> ProvisionConfig:
        """Run every stage, raising the first ProvisionerError encountered."""
        self.config = None
        self.current_stage = None
        self.completed_stages = []
        self.database_service.batch_submitted = False

        self._run_stage("check_privileges", self.check_privileges)
        self.config = self._run_stage("resolve_configuration", self.resolve_configuration)

        console.print("[bold blue]Starting LEMP server installation and configuration...[/bold blue]")
        logger.info(
            "Provisioning PHP %s with web root %s",
            self.config.php_version,
            self.config.web_root,
        )

        self._run_stage("update_packages", self.update_packages)
        self._run_stage("install_packages", self.install_packages)
        self._run_stage("harden_database", self.harden_database)
        self._run_stage("configure_proxy", self.configure_proxy)
        self._run_stage("activate_services", self.activate_services)
        self._run_stage("report", self.report)
        return self.config

    def _exit_code_for(self, exc: ProvisionerError) -> int:
        if isinstance(exc, PrivilegeError):
            return EXIT_PRIVILEGE_ERROR
        if isinstance(exc, ExternalCommandError) and exc.returncode:
            if 0 < exc.returncode < 256 and exc.returncode != EXIT_PRIVILEGE_ERROR:
                return exc.returncode
        return EXIT_FAILURE

    def _disclose_credential_after_failure(self):
        if self.config is None:
            return
        if "harden_database" in self.completed_stages:
            outcome = "was already changed"
        elif self.database_service.batch_submitted:
            # ALTER USER commits on its own even when a later statement in the batch fails.
            outcome = "may have been changed"
        else:
            return
        console.print(
            f"[bold yellow]The MariaDB root password {outcome} before the failure. "
            "Store it now:[/bold yellow]"
        )
        console.print(f"   Password: {self.config.db_root_password}", markup=False, highlight=False)

    def run(self) -> int:
        try:
            logger.info("Starting AutoServer...")
            self.provision()
            return EXIT_SUCCESS

        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            self._disclose_credential_after_failure()
            return EXIT_FAILURE
        except ProvisionerError as exc:
            console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
            logger.error("Stage '%s' failed: %s", exc.stage or "run", exc)
            self._disclose_credential_after_failure()
            return self._exit_code_for(exc)
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(exc))}")
            logger.exception("Unexpected error")
            self._disclose_credential_after_failure()
            return EXIT_FAILURE
