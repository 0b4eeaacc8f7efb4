"""Filesystem helpers for AutoServer."""

import logging
import os

from rich.console import Console

from autoserver.errors import ProvisionerError
from autoserver.errors_catalog import actionable_error


class FileSystemService:
    """Encapsulates file and link side effects."""

    def __init__(self, logger: logging.Logger, console: Console):
        self.logger = logger
        self.console = console

    def write_text(self, path: str, content: str):
        """Overwrite ``path`` with ``content``; previous content is not kept."""
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as file_obj:
                file_obj.write(content)
        except OSError as exc:
            raise ProvisionerError(f"Could not write {path}: {exc}") from exc
        self.logger.debug("Wrote %s", path)

    def write_private_text(self, path: str, content: str, mode: int):
        """Write ``content`` to a file readable only by its owner."""
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            # O_CREAT ignores mode for files that already exist
            os.fchmod(fd, mode)
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as file_obj:
                file_obj.write(content)
        except OSError as exc:
            raise ProvisionerError(f"Could not write {path}: {exc}") from exc
        self.logger.debug("Wrote %s with mode %o", path, mode)

    def ensure_symlink(self, target: str, link_path: str):
        if os.path.islink(link_path) and os.readlink(link_path) == target:
            self.logger.info("Link %s already points to %s", link_path, target)
            return
        if os.path.lexists(link_path):
            raise ProvisionerError(
                actionable_error("admin_panel_link_conflict", path=link_path, target=target)
            )

        try:
            os.makedirs(os.path.dirname(link_path) or ".", exist_ok=True)
            os.symlink(target, link_path)
        except OSError as exc:
            raise ProvisionerError(f"Could not link {link_path} -> {target}: {exc}") from exc
        self.logger.debug("Linked %s -> %s", link_path, target)
