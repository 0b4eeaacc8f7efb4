"""systemd service lifecycle helpers for AutoServer."""

from typing import Callable, Iterable


class ServiceManager:
    """Thin wrapper over ``systemctl`` for named units."""

    def __init__(self, logger, console, run_cmd: Callable):
        self.logger = logger
        self.console = console
        self.run_cmd = run_cmd

    def _systemctl(self, action: str, service: str):
        self.logger.info("systemctl %s %s", action, service)
        self.run_cmd(["systemctl", action, service])

    def start(self, service: str):
        self._systemctl("start", service)

    def restart(self, service: str):
        self._systemctl("restart", service)

    def enable(self, service: str):
        self._systemctl("enable", service)

    def activate(self, services: Iterable[str]):
        """Restart then enable each service in order.

        There is no health check after the restart.
        """
        self.console.print("[blue]Restarting and enabling services...[/blue]")
        for service in services:
            self.restart(service)
            self.enable(service)
        self.console.print("[green]Services restarted and enabled at boot.[/green]")
