"""nginx site configuration services for AutoServer."""

from typing import Callable

from autoserver.constants import NGINX_SITE_PATH
from autoserver.errors import ConfigurationValidationError, ExternalCommandError
from autoserver.errors_catalog import actionable_error
from autoserver.models import ProvisionConfig


def render_site_config(config: ProvisionConfig) -> str:
    """Render the default site wiring nginx to PHP-FPM over its unix socket."""
    return f"""server {{
    listen 80 default_server;
    listen [::]:80 default_server;

    root {config.web_root};
    index index.php index.html index.htm;

    server_name _;

    location / {{
        try_files $uri $uri/ =404;
    }}

    location ~ \\.php$ {{
        include snippets/fastcgi-php.conf;
        fastcgi_pass unix:{config.php_fpm_socket};
    }}

    location ~ /\\.ht {{
        deny all;
    }}
}}
"""


class NginxConfigurator:
    """Writes the default site and validates it before anything is reloaded."""

    def __init__(
        self,
        logger,
        console,
        filesystem_service,
        run_cmd: Callable,
        site_path: str = NGINX_SITE_PATH,
    ):
        self.logger = logger
        self.console = console
        self.filesystem_service = filesystem_service
        self.run_cmd = run_cmd
        self.site_path = site_path

    def write_site_config(self, config: ProvisionConfig):
        self.logger.info("Writing nginx site configuration to %s", self.site_path)
        self.filesystem_service.write_text(self.site_path, render_site_config(config))

    def validate(self):
        try:
            self.run_cmd(["nginx", "-t"], capture_output=True)
        except ExternalCommandError as exc:
            message = f"{actionable_error('nginx_config_invalid', path=self.site_path)}\n{exc}"
            raise ConfigurationValidationError(
                message,
                cmd=exc.cmd,
                returncode=exc.returncode,
                output=exc.output,
            ) from exc

    def configure(self, config: ProvisionConfig):
        self.console.print("[blue]Configuring nginx to serve PHP through PHP-FPM...[/blue]")
        self.write_site_config(config)
        self.validate()
        self.console.print("[green]nginx configuration is valid.[/green]")
