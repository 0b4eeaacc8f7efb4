"""Configuration loader for AutoServer."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from packaging import version

from autoserver.errors import ProvisionerError
from autoserver.errors_catalog import actionable_error


def normalize_php_version(value: str) -> str:
    """Return ``value`` as ``MAJOR.MINOR`` or raise for anything else."""
    clean_value = value.strip()
    try:
        parsed = version.Version(clean_value)
    except version.InvalidVersion as exc:
        raise ProvisionerError(actionable_error("invalid_php_version", value=clean_value)) from exc

    if (
        len(parsed.release) != 2
        or parsed.epoch
        or parsed.is_prerelease
        or parsed.is_postrelease
        or parsed.local
    ):
        raise ProvisionerError(actionable_error("invalid_php_version", value=clean_value))
    return f"{parsed.major}.{parsed.minor}"


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    SUPPORTED_KEYS = {
        "php_version": str,
        "web_root": str,
        "credentials_file": str,
        "verbose": bool,
        "log_file": str,
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise ProvisionerError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise ProvisionerError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise ProvisionerError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - set(self.SUPPORTED_KEYS))
        if unknown:
            unknown_list = ", ".join(unknown)
            raise ProvisionerError(f"Unknown configuration keys: {unknown_list}")

        self._validate_types(parsed)
        if "php_version" in parsed:
            parsed["php_version"] = normalize_php_version(parsed["php_version"])

        return parsed

    def _validate_types(self, parsed: Dict[str, Any]):
        for key, value in parsed.items():
            expected = self.SUPPORTED_KEYS[key]
            if isinstance(value, expected):
                continue
            # Unquoted YAML numbers lose digits: 8.10 loads as the float 8.1.
            if key == "php_version":
                raise ProvisionerError(actionable_error("config_php_version_not_string", value=str(value)))
            raise ProvisionerError(
                f"Configuration key '{key}' must be a {expected.__name__}, "
                f"got {type(value).__name__}: {value!r}"
            )
