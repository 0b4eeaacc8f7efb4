import logging
import os

import click
from rich.logging import RichHandler

from .constants import DEFAULT_PHP_VERSION, DEFAULT_WEB_ROOT
from .core import AutoServer, ProvisionerError
from .services.config_loader import ConfigLoader

DEFAULT_CONFIG_FILE = ".autoserver.yml"


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option(
    "--php-version",
    required=False,
    help=f"PHP version whose FPM packages and socket are used (default: {DEFAULT_PHP_VERSION})",
)
@click.option(
    "--web-root",
    required=False,
    help=f"Document root served by nginx (default: {DEFAULT_WEB_ROOT})",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option(
    "--credentials-file",
    required=False,
    type=click.Path(dir_okay=False),
    help="Also write the generated credentials to this file (mode 0600).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(php_version, web_root, config, credentials_file, verbose, log_file):
    """Install and secure an nginx, MariaDB, PHP-FPM and phpMyAdmin stack."""
    logger = logging.getLogger("autoserver")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except ProvisionerError as exc:
        raise click.ClickException(str(exc)) from exc

    php_version = _resolve_option(php_version, config_values, "php_version", default=DEFAULT_PHP_VERSION)
    web_root = _resolve_option(web_root, config_values, "web_root", default=DEFAULT_WEB_ROOT)
    credentials_file = _resolve_option(credentials_file, config_values, "credentials_file")
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    try:
        server = AutoServer(
            php_version=php_version,
            web_root=web_root,
            credentials_file=credentials_file,
        )
    except ProvisionerError as exc:
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(server.run())


if __name__ == "__main__":
    main()
