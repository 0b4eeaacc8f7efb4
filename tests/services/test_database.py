import pytest

from autoserver.errors import ExternalCommandError
from autoserver.services.database import DatabaseService, MariaDBClient, build_hardening_script


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def info(self, *_args, **_kwargs):
        return None


class DummyConsole:
    def print(self, *_args, **_kwargs):
        return None


class RecordingServiceManager:
    def __init__(self, events):
        self.events = events

    def enable(self, service):
        self.events.append(("enable", service))

    def start(self, service):
        self.events.append(("start", service))


class StubClient:
    def __init__(self, events, error=None):
        self.events = events
        self.scripts = []
        self.error = error

    def execute_script(self, sql):
        self.events.append(("execute_script", None))
        self.scripts.append(sql)
        if self.error:
            raise self.error


def test_hardening_script_orders_statements():
    statements = [line for line in build_hardening_script("S3cret").splitlines() if line]

    assert statements == [
        "ALTER USER 'root'@'localhost' IDENTIFIED BY 'S3cret';",
        "DELETE FROM mysql.user WHERE User='';",
        "DROP DATABASE IF EXISTS test;",
        "DELETE FROM mysql.db WHERE Db='test' OR Db='test\\_%';",
        "FLUSH PRIVILEGES;",
    ]


def test_harden_starts_service_and_submits_single_batch():
    events = []
    client = StubClient(events)
    service = DatabaseService(
        logger=DummyLogger(),
        console=DummyConsole(),
        service_manager=RecordingServiceManager(events),
        client=client,
    )

    service.harden("S3cret")

    assert events == [("enable", "mariadb"), ("start", "mariadb"), ("execute_script", None)]
    assert len(client.scripts) == 1
    assert service.batch_submitted is True
    batch = client.scripts[0]
    for statement in ("ALTER USER", "DELETE FROM mysql.user", "DROP DATABASE", "FLUSH PRIVILEGES"):
        assert statement in batch


def test_harden_failure_explains_non_idempotent_rerun():
    events = []
    client = StubClient(
        events,
        error=ExternalCommandError(
            "Command failed (1): mysql -u root",
            cmd=["mysql", "-u", "root"],
            returncode=1,
            output="ERROR 1045 (28000): Access denied for user 'root'@'localhost'",
        ),
    )
    service = DatabaseService(
        logger=DummyLogger(),
        console=DummyConsole(),
        service_manager=RecordingServiceManager(events),
        client=client,
    )

    with pytest.raises(ExternalCommandError, match="root no longer logs in without a password") as exc_info:
        service.harden("S3cret")

    assert exc_info.value.returncode == 1
    assert "Access denied" in exc_info.value.output
    assert service.batch_submitted is True


def test_mariadb_client_sends_batch_over_stdin_in_one_process():
    calls = []
    client = MariaDBClient(logger=DummyLogger(), run_cmd=lambda cmd, **kwargs: calls.append((cmd, kwargs)))

    client.execute_script("FLUSH PRIVILEGES;\n")

    assert len(calls) == 1
    cmd, kwargs = calls[0]
    assert cmd == ["mysql", "-u", "root"]
    assert kwargs["input_text"] == "FLUSH PRIVILEGES;\n"
