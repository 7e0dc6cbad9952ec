"""tests/test_cli.py — end to end through the CLI handle against a fake copilot."""
import io
import json

import pytest

from copilot_bridge.cli import CLI
from copilot_bridge.errors import CommandFailedError, DecodeError, SetupError
from copilot_bridge.models import (
    AppInitRequest, EnvInitRequest, EnvShowRequest, InitRequest, SvcDeployInput,
    SvcInitRequest, SvcLogsRequest, SvcShowRequest, SvcStatusRequest, TaskRunInput,
)


@pytest.fixture
def cli(fake_copilot):
    return CLI(fake_copilot, timeout_s=30)


def argv_of(text):
    return json.loads(text)["argv"]


class TestSetup:
    def test_missing_binary(self, tmp_path):
        with pytest.raises(SetupError):
            CLI(tmp_path / "copilot")

    def test_not_executable(self, tmp_path):
        path = tmp_path / "copilot"
        path.write_text("#!/bin/sh\n")
        path.chmod(0o644)
        with pytest.raises(SetupError):
            CLI(path)

    def test_default_location_from_config(self, fake_copilot, monkeypatch):
        monkeypatch.setattr("copilot_bridge.cli.COPILOT_CLI_PATH", fake_copilot)
        assert CLI().path == fake_copilot

    def test_path_is_read_only(self, cli):
        with pytest.raises(AttributeError):
            cli.path = "/bin/true"


class TestTextCommands:
    def test_app_init(self, cli):
        out = cli.app_init(AppInitRequest(app_name="demo", domain="example.com", tags={"env": "prod"}))
        assert argv_of(out) == ["app", "init", "demo", "--domain", "example.com", "--resource-tags", "env=prod"]

    def test_app_list_and_delete(self, cli):
        assert argv_of(cli.app_list()) == ["app", "ls"]
        assert argv_of(cli.app_delete()) == ["app", "delete", "--yes"]

    def test_help_and_version(self, cli):
        assert argv_of(cli.help()) == ["--help"]
        assert argv_of(cli.version()) == ["--version"]

    def test_init(self, cli):
        req = InitRequest(app_name="demo", workload_name="front", workload_type="Backend Service",
                          dockerfile="Dockerfile", deploy=True)
        assert argv_of(cli.init(req))[-1] == "--deploy"

    def test_env_init_and_delete(self, cli):
        req = EnvInitRequest(app_name="demo", env_name="test", profile="default", prod=True)
        assert "--prod" in argv_of(cli.env_init(req))
        assert argv_of(cli.env_delete("test")) == ["env", "delete", "--name", "test", "--yes"]

    def test_svc_lifecycle(self, cli):
        assert argv_of(cli.svc_init(SvcInitRequest(name="front", svc_type="Backend Service",
                                                   dockerfile="Dockerfile")))[:2] == ["svc", "init"]
        assert argv_of(cli.svc_deploy(SvcDeployInput(name="front", env_name="test")))[:2] == ["svc", "deploy"]
        assert argv_of(cli.svc_delete("front")) == ["svc", "delete", "--name", "front", "--yes"]

    def test_task_run(self, cli):
        out = cli.task_run(TaskRunInput(group_name="hello", image="busybox", follow=True))
        assert argv_of(out) == ["task", "run", "-n", "hello", "--image", "busybox", "--follow"]

    def test_failure_surfaces_output(self, cli, monkeypatch):
        monkeypatch.setenv("FAKE_COPILOT_MODE", "fail")
        with pytest.raises(CommandFailedError) as exc_info:
            cli.svc_deploy(SvcDeployInput(name="front", env_name="test"))
        assert "boom" in exc_info.value.text


class TestJSONCommands:
    def test_app_show(self, cli, payload):
        payload(b'{"name":"demo","uri":"https://example.com"}')
        assert cli.app_show("demo").uri == "https://example.com"

    def test_svc_status(self, cli, payload):
        payload(b'{"name":"web","status":"ACTIVE"}')
        out = cli.svc_status(SvcStatusRequest(app_name="demo", name="web", env_name="test"))
        assert (out.name, out.status) == ("web", "ACTIVE")

    def test_stderr_noise_does_not_break_decoding(self, cli, payload, monkeypatch):
        payload(b'{"name":"web","status":"ACTIVE"}\n')
        monkeypatch.setenv("FAKE_COPILOT_STDERR", "- Fetching status")
        assert cli.svc_status(SvcStatusRequest(app_name="demo", name="web", env_name="test")).name == "web"

    def test_svc_show(self, cli, payload):
        payload(b'{"service":"front","application":"demo"}')
        assert cli.svc_show(SvcShowRequest(app_name="demo", name="front")).name == "front"

    def test_svc_list(self, cli, payload):
        payload(b'{"services":[{"name":"front","type":"Backend Service","app":"demo"}]}')
        assert cli.svc_list("demo").services[0].name == "front"

    def test_svc_logs(self, cli, payload):
        payload(b'{"message":"GET /"}\n{"message":"GET /health"}\n')
        logs = cli.svc_logs(SvcLogsRequest(app_name="demo", name="front", env_name="test", since="1h"))
        assert [entry.message for entry in logs] == ["GET /", "GET /health"]

    def test_env_show_and_list(self, cli, payload):
        payload(b'{"environment":{"name":"test","app":"demo"}}')
        assert cli.env_show(EnvShowRequest(app_name="demo", env_name="test")).environment.name == "test"
        payload(b'{"environments":[{"name":"test"}]}')
        assert cli.env_list("demo").envs[0].name == "test"

    def test_bad_json_is_decode_error(self, cli, payload):
        payload(b'{"name":"web"')
        with pytest.raises(DecodeError):
            cli.svc_status(SvcStatusRequest(app_name="demo", name="web", env_name="test"))

    def test_failure_is_not_decoded(self, cli, monkeypatch):
        monkeypatch.setenv("FAKE_COPILOT_MODE", "fail")
        with pytest.raises(CommandFailedError):
            cli.app_show("demo")


def test_mirror_receives_live_output(fake_copilot):
    mirror = io.BytesIO()
    cli = CLI(fake_copilot, timeout_s=30, mirror=mirror)
    cli.app_list()
    assert b'"argv": ["app", "ls"]' in mirror.getvalue()


def test_extra_env_passed_through(fake_copilot):
    cli = CLI(fake_copilot, env={"FAKE_COPILOT_EXTRA": "hello"})
    assert json.loads(cli.app_list())["extra"] == "hello"
