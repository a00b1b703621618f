"""Tests for the command-line entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sierpinski.cli import main, parse_args
from sierpinski.domain.models import Config, ScreenDimension
from sierpinski.terminal.base import RenderError, TerminalSetupError


@pytest.fixture
def no_config(tmp_path: Path) -> list[str]:
    return ["-c", str(tmp_path / "missing.yaml")]


@pytest.fixture
def fake_terminal():
    terminal = MagicMock()
    terminal.size.return_value = ScreenDimension(width=80, height=24)
    with patch("sierpinski.terminal.ansi.AnsiTerminal", return_value=terminal):
        yield terminal


@pytest.fixture
def fake_renderer():
    renderer = MagicMock()
    with patch("sierpinski.renderer.loop.TerminalRenderer", return_value=renderer) as cls:
        renderer.cls = cls
        yield renderer


class TestParseArgs:
    def test_defaults_leave_settings_alone(self) -> None:
        args = parse_args([])
        assert args.max_iterations is None
        assert args.refresh_rate is None
        assert args.config is None
        assert args.verbose is False

    def test_short_flags(self) -> None:
        args = parse_args(["-i", "500", "-r", "20", "-v"])
        assert args.max_iterations == 500
        assert args.refresh_rate == 20
        assert args.verbose is True

    @pytest.mark.parametrize(
        "argv",
        [["-i", "0"], ["-i", "1000001"], ["-i", "ten"], ["-r", "-1"], ["-r", "3600001"]],
    )
    def test_out_of_range_values_exit_with_usage_error(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_args(argv)
        assert exc_info.value.code == 2


class TestMain:
    def test_normal_quit_returns_zero(self, no_config, fake_terminal, fake_renderer) -> None:
        assert main(no_config + ["-i", "42", "-r", "7"]) == 0

        fake_renderer.run.assert_called_once()
        config = fake_renderer.run.call_args.args[0]
        assert isinstance(config, Config)
        assert config.max_iterations == 42
        assert config.refresh_rate_ms == 7
        assert config.screen_dim == ScreenDimension(width=80, height=24)

    def test_renderer_receives_terminal_and_settings(self, no_config, fake_terminal, fake_renderer) -> None:
        main(no_config)
        args, kwargs = fake_renderer.cls.call_args
        assert args[0] is fake_terminal
        assert kwargs["glyph"] == "*"
        assert kwargs["poll_interval"] == pytest.approx(0.1)

    def test_config_file_dimensions(self, tmp_path: Path, fake_terminal, fake_renderer) -> None:
        path = tmp_path / "sierpinski.yaml"
        path.write_text("terminal:\n  width: 40\n  height: 20\n")
        assert main(["-c", str(path)]) == 0
        config = fake_renderer.run.call_args.args[0]
        assert config.screen_dim == ScreenDimension(width=40, height=20)

    @pytest.mark.parametrize("error", [RenderError("write failed"), TerminalSetupError("no tty")])
    def test_terminal_error_returns_one(
        self, no_config, fake_terminal, fake_renderer, capsys: pytest.CaptureFixture[str], error: Exception
    ) -> None:
        fake_renderer.run.side_effect = error
        assert main(no_config) == 1
        assert f"error: {error}" in capsys.readouterr().err

    def test_unknown_size_returns_one(
        self, no_config, fake_terminal, fake_renderer, capsys: pytest.CaptureFixture[str]
    ) -> None:
        fake_terminal.size.side_effect = OSError("not a terminal")
        assert main(no_config) == 1
        assert "cannot determine terminal size" in capsys.readouterr().err
        fake_renderer.run.assert_not_called()

    def test_verbose_logs_wait_until_terminal_is_restored(
        self, no_config, fake_terminal, fake_renderer, capsys: pytest.CaptureFixture[str]
    ) -> None:
        during_run: list[str] = []

        def run(config: Config) -> None:
            capsys.readouterr()
            logging.getLogger("sierpinski.renderer.loop").debug("State: idle -> setup")
            logging.getLogger("sierpinski.renderer.loop").warning("teardown step failed")
            during_run.append(capsys.readouterr().err)

        fake_renderer.run.side_effect = run
        assert main(no_config + ["-v"]) == 0

        assert during_run == [""]
        err = capsys.readouterr().err
        assert err.index("State: idle -> setup") < err.index("teardown step failed")

    def test_logs_held_during_failed_run_precede_error_message(
        self, no_config, fake_terminal, fake_renderer, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def run(config: Config) -> None:
            logging.getLogger("sierpinski.renderer.loop").debug("painting")
            raise RenderError("write failed")

        fake_renderer.run.side_effect = run
        assert main(no_config + ["-v"]) == 1

        err = capsys.readouterr().err
        assert err.index("painting") < err.index("error: write failed")
