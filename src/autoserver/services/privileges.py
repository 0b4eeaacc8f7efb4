"""Privilege precondition checks for AutoServer."""

import os
from typing import Callable

from autoserver.errors import PrivilegeError
from autoserver.errors_catalog import actionable_error


class PrivilegeService:
    """Verifies the process runs as the administrative identity."""

    def __init__(self, logger, geteuid: Callable[[], int] = os.geteuid):
        self.logger = logger
        self.geteuid = geteuid

    def ensure_root(self):
        euid = self.geteuid()
        if euid != 0:
            raise PrivilegeError(actionable_error("not_root"))
        self.logger.debug("Running with effective UID 0.")
