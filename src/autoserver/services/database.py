"""MariaDB hardening services for AutoServer."""

from typing import Callable

from autoserver.constants import DATABASE_SERVICE, DB_ADMIN_USER
from autoserver.errors import ExternalCommandError
from autoserver.errors_catalog import actionable_error


def build_hardening_script(root_password: str) -> str:
    """SQL equivalent of ``mysql_secure_installation`` for a fresh server.

    The password is set first, in the same session that still has
    passwordless root access.
    """
    return "\n".join(
        [
            f"ALTER USER '{DB_ADMIN_USER}'@'localhost' IDENTIFIED BY '{root_password}';",
            "DELETE FROM mysql.user WHERE User='';",
            "DROP DATABASE IF EXISTS test;",
            "DELETE FROM mysql.db WHERE Db='test' OR Db='test\\_%';",
            "FLUSH PRIVILEGES;",
            "",
        ]
    )


class MariaDBClient:
    """Submits statement batches through the ``mysql`` command-line client."""

    def __init__(self, logger, run_cmd: Callable, user: str = DB_ADMIN_USER):
        self.logger = logger
        self.run_cmd = run_cmd
        self.user = user

    def execute_script(self, sql: str):
        # Piped over stdin so the credential never shows up in the process list.
        self.logger.debug("Submitting SQL batch to mysql as %s", self.user)
        self.run_cmd(["mysql", "-u", self.user], capture_output=True, input_text=sql)


class DatabaseService:
    """Brings MariaDB up and applies the hardening batch."""

    def __init__(self, logger, console, service_manager, client):
        self.logger = logger
        self.console = console
        self.service_manager = service_manager
        self.client = client
        self.batch_submitted = False

    def ensure_running(self):
        self.service_manager.enable(DATABASE_SERVICE)
        self.service_manager.start(DATABASE_SERVICE)

    def harden(self, root_password: str):
        self.console.print("[blue]Securing the MariaDB server...[/blue]")
        self.ensure_running()

        self.batch_submitted = True
        try:
            self.client.execute_script(build_hardening_script(root_password))
        except ExternalCommandError as exc:
            message = f"{actionable_error('database_hardening_failed')}\n{exc}"
            raise ExternalCommandError(
                message,
                cmd=exc.cmd,
                returncode=exc.returncode,
                output=exc.output,
            ) from exc

        self.console.print("[green]MariaDB root password set; anonymous users and test database removed.[/green]")
