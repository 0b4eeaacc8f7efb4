"""Actionable error catalog for AutoServer."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "not_root": {
        "what": "This tool must be run with root privileges.",
        "next": "Run it again as root, for example: `sudo autoserver`.",
    },
    "command_not_found": {
        "what": "Required command not found: {command}.",
        "next": "Make sure this is a Debian-family host with `{command}` on PATH.",
    },
    "random_source_unavailable": {
        "what": "The system's secure random source is unavailable: {reason}",
        "next": "Fix the host's entropy source; no weaker generator will be used.",
    },
    "invalid_php_version": {
        "what": "Invalid PHP version `{value}`. Expected a MAJOR.MINOR version such as 8.2.",
        "next": "Pass `--php-version` with a version your distribution packages.",
    },
    "config_php_version_not_string": {
        "what": "Config key `php_version` must be a quoted string; YAML read it as the number {value}.",
        "next": "Quote the version in the config file, for example: php_version: '8.10'.",
    },
    "relative_web_root": {
        "what": "Web root must be an absolute path, got `{value}`.",
        "next": "Pass `--web-root` with an absolute path such as /var/www/html.",
    },
    "unsafe_web_root": {
        "what": "Web root `{value}` contains characters nginx would not read as part of the path.",
        "next": "Choose a directory without whitespace, quotes, backslashes or the characters ; {{ }} # $.",
    },
    "admin_panel_link_conflict": {
        "what": "Cannot link phpMyAdmin: {path} already exists and is not a link to {target}.",
        "next": "Move or remove {path} and run the provisioning again.",
    },
    "database_hardening_failed": {
        "what": "MariaDB rejected the hardening batch.",
        "next": (
            "If this host was provisioned before, root no longer logs in without a password; "
            "reset it with `mariadb-admin` or start from a fresh host."
        ),
    },
    "nginx_config_invalid": {
        "what": "nginx rejected the generated site configuration at {path}.",
        "next": "Inspect the output of `nginx -t`; running services were not restarted.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
