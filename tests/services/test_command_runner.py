import sys

import pytest

from autoserver.errors import ExternalCommandError
from autoserver.services.command_runner import CommandRunner


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


def test_command_runner_raises_with_stderr():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(ExternalCommandError, match="boom") as exc_info:
        runner.run(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"],
            capture_output=True,
        )

    assert exc_info.value.returncode == 3
    assert exc_info.value.output == "boom"


def test_command_runner_feeds_stdin():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"],
        capture_output=True,
        input_text="select 1;",
    )

    assert result.stdout == "SELECT 1;"


def test_command_runner_merges_environment():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import os; print(os.environ['DEBIAN_FRONTEND'])"],
        capture_output=True,
        env={"DEBIAN_FRONTEND": "noninteractive"},
    )

    assert result.stdout.strip() == "noninteractive"


def test_command_runner_reports_missing_binary():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(ExternalCommandError, match="Required command not found: autoserver-no-such-tool"):
        runner.run(["autoserver-no-such-tool", "--version"])
