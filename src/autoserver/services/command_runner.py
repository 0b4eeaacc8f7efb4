"""Subprocess execution service for AutoServer."""

import os
import subprocess
from typing import Dict, List, Optional

from autoserver.errors import ExternalCommandError
from autoserver.errors_catalog import actionable_error


class CommandRunner:
    """Runs external commands once each, failing fast on non-zero exit."""

    def __init__(self, logger):
        self.logger = logger

    def run(
        self,
        cmd: List[str],
        capture_output: bool = False,
        input_text: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        run_env = None
        if env:
            run_env = dict(os.environ)
            run_env.update(env)

        try:
            result = subprocess.run(
                cmd,
                text=True,
                capture_output=capture_output,
                input=input_text,
                env=run_env,
            )
        except FileNotFoundError as exc:
            raise ExternalCommandError(
                actionable_error("command_not_found", command=cmd[0]),
                cmd=cmd,
            ) from exc
        except OSError as exc:
            raise ExternalCommandError(f"Failed to execute command: {cmd_str}. {exc}", cmd=cmd) from exc

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0:
            return result

        output = ""
        if capture_output:
            output = "\n".join(
                part.strip() for part in (result.stdout, result.stderr) if part and part.strip()
            )
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if output:
            message = f"{message}\n{output}"

        raise ExternalCommandError(message, cmd=cmd, returncode=result.returncode, output=output)
