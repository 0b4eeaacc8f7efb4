"""Final access report for AutoServer."""

from typing import Optional

from autoserver.constants import ADMIN_PANEL_URL, CREDENTIALS_FILE_MODE, DB_ADMIN_USER
from autoserver.models import ProvisionConfig


class ReportService:
    """Discloses the admin panel URL and generated credential to the operator."""

    def __init__(self, logger, console, filesystem_service):
        self.logger = logger
        self.console = console
        self.filesystem_service = filesystem_service

    def build_credentials_text(self, config: ProvisionConfig) -> str:
        return (
            f"phpMyAdmin URL: {ADMIN_PANEL_URL}\n"
            f"MariaDB user: {DB_ADMIN_USER}\n"
            f"MariaDB password: {config.db_root_password}\n"
        )

    def emit(self, config: ProvisionConfig, credentials_file: Optional[str] = None):
        rule = "=" * 67
        self.console.print()
        self.console.print(f"[bold green]{rule}[/bold green]")
        self.console.print("[bold green]SUCCESS! Your server has been provisioned by AutoServer.[/bold green]")
        self.console.print(f"[bold green]{rule}[/bold green]")
        self.console.print()
        self.console.print("Manage your databases with phpMyAdmin:")
        self.console.print(f"   URL: {ADMIN_PANEL_URL}", markup=False)
        self.console.print()
        self.console.print("MariaDB credentials:")
        self.console.print(f"   User:     {DB_ADMIN_USER}", markup=False)
        self.console.print(f"   Password: {config.db_root_password}", markup=False, highlight=False)
        self.console.print()
        self.console.print(
            "[bold yellow]IMPORTANT: store this password somewhere safe. "
            "It is not shown again.[/bold yellow]"
        )

        if credentials_file:
            self.filesystem_service.write_private_text(
                credentials_file,
                self.build_credentials_text(config),
                CREDENTIALS_FILE_MODE,
            )
            self.console.print(f"Credentials also written to {credentials_file}", markup=False)
            self.logger.info("Credentials written to %s", credentials_file)

        self.logger.info("Provisioning finished; access report printed.")
