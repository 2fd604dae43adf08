import logging
from unittest.mock import patch

import pytest

from tool_server import cli
from tool_server.server import ToolServer


@pytest.fixture
def clean_env(monkeypatch):
    for name in ["API_KEY", "SERVER_NAME", "NODE_ENV", "PORT", "CUSTOM_SETTING"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "load_env_file", lambda: False)
    monkeypatch.setattr(cli, "configure_logging", lambda: None)
    return monkeypatch


class TestValidateEnvironment:
    def test_missing_api_key_exits_with_1(self, clean_env, capsys):
        clean_env.setenv("SERVER_NAME", "demo")
        with pytest.raises(SystemExit) as exc_info:
            cli.validate_environment()
        assert exc_info.value.code == 1

        err = capsys.readouterr().err
        assert "缺少的变量: API_KEY" in err
        assert "SERVER_NAME" not in err

    def test_missing_both_names_both(self, clean_env, capsys):
        with pytest.raises(SystemExit):
            cli.validate_environment()
        err = capsys.readouterr().err
        assert "缺少的变量: API_KEY, SERVER_NAME" in err

    def test_nothing_written_to_stdout(self, clean_env, capsys):
        with pytest.raises(SystemExit):
            cli.validate_environment()
        assert capsys.readouterr().out == ""

    def test_success_prints_masked_confirmation(self, clean_env, capsys):
        clean_env.setenv("API_KEY", "sk-secret-123456")
        clean_env.setenv("SERVER_NAME", "demo")
        config = cli.validate_environment()
        captured = capsys.readouterr()
        assert config.server_name == "demo"
        assert "sk-se***" in captured.err
        assert "sk-secret-123456" not in captured.err
        assert captured.out == ""


class TestMain:
    def test_missing_config_never_starts_server(self, clean_env):
        with patch.object(cli, "anyio") as anyio_mock:
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 1
        anyio_mock.run.assert_not_called()

    def test_graceful_shutdown_exits_0(self, clean_env):
        clean_env.setenv("API_KEY", "k")
        clean_env.setenv("SERVER_NAME", "demo")
        with patch.object(cli, "anyio") as anyio_mock:
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 0
        anyio_mock.run.assert_called_once()

    def test_transport_failure_exits_1(self, clean_env):
        clean_env.setenv("API_KEY", "k")
        clean_env.setenv("SERVER_NAME", "demo")
        with patch.object(cli, "anyio") as anyio_mock:
            anyio_mock.run.side_effect = OSError("stdin closed")
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 1

    def test_keyboard_interrupt_exits_0(self, clean_env):
        clean_env.setenv("API_KEY", "k")
        clean_env.setenv("SERVER_NAME", "demo")
        with patch.object(cli, "anyio") as anyio_mock:
            anyio_mock.run.side_effect = KeyboardInterrupt
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 0


def test_build_tool_server(config):
    server = cli.build_tool_server(config)
    assert isinstance(server, ToolServer)
    assert server.dispatcher.tool_names == ["echo", "get_time", "get_env", "get_config"]


def test_configure_logging_uses_stderr():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        cli.configure_logging("debug")
        handler = root.handlers[0]
        assert handler.stream is cli.sys.stderr
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
