"""Tests for the command-line interface."""

import json

import pytest

from launcher import __version__, cli
from launcher.core.items import Item, LauncherAction, LauncherResult


@pytest.fixture
def no_user_config(tmp_path):
    """Arguments that keep the user's own configuration out of tests."""
    return ["--config", str(tmp_path / "config.yaml"), "--config-dir", str(tmp_path / "conf.d")]


@pytest.fixture
def items_file(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(
        json.dumps(
            [
                {"id": "a", "title": "Alpha"},
                {"id": "b", "title": "Beta", "subtitle": "second"},
                {"id": "c", "title": "Gamma Alpha"},
            ]
        )
    )
    return path


class FakeTTY:
    """Stand-in for a terminal stdin."""

    def isatty(self):
        return True


@pytest.fixture
def fake_launcher(monkeypatch):
    """Replace the interactive launcher with a canned outcome."""
    calls = {}

    class FakeLauncher:
        outcome = LauncherResult.dismissed()

        def __init__(self, config, theme=None):
            calls["config"] = config
            calls["theme"] = theme

        def show(self, placeholder=None, items=None, input=None, output=None):
            calls["placeholder"] = placeholder
            calls["items"] = items
            if isinstance(self.outcome, BaseException):
                raise self.outcome
            return self.outcome

    monkeypatch.setattr(cli, "Launcher", FakeLauncher)
    monkeypatch.setattr(cli, "create_input", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli, "create_output", lambda *args, **kwargs: None)
    monkeypatch.setattr("sys.stdin", FakeTTY())
    FakeLauncher.calls = calls
    return FakeLauncher


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = cli.parse_args([])

        assert args.placeholder is None
        assert args.items is None
        assert args.filter is None
        assert args.json is False

    def test_version(self, capsys):
        """Test --version output."""
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestFilterMode:
    """Tests for --filter."""

    def test_ranked_output(self, capsys, items_file, no_user_config):
        """Test ranked items are printed with their scores."""
        code = cli.main(["--filter", "al", "--items", str(items_file), "--no-color", *no_user_config])

        assert code == 0
        assert capsys.readouterr().out.splitlines() == [
            " 1095  Alpha",
            "  589  Gamma Alpha",
        ]

    def test_subtitle_shown(self, capsys, items_file, no_user_config):
        """Test that subtitles follow the title."""
        cli.main(["-f", "sec", "-i", str(items_file), *no_user_config])

        assert capsys.readouterr().out.splitlines() == [" 1094  Beta  second"]

    def test_empty_query_lists_all(self, capsys, items_file, no_user_config):
        """Test that an empty filter keeps input order."""
        cli.main(["--filter", "", "--items", str(items_file), *no_user_config])

        lines = capsys.readouterr().out.splitlines()

        assert [line.split()[0] for line in lines] == ["0", "0", "0"]
        assert "Alpha" in lines[0]
        assert "Gamma Alpha" in lines[2]

    def test_format_ranked_color(self, sample_items, sample_config):
        """Test ANSI colors from the theme."""
        lines = cli.format_ranked(sample_items, "beta", sample_config.get_theme(), color=True)

        assert len(lines) == 1
        assert "\033[" in lines[0]
        assert "Beta" in lines[0]


class TestErrors:
    """Tests for error exit codes."""

    def test_missing_items_file(self, capsys, tmp_path, no_user_config):
        """Test that a missing items file exits 1."""
        code = cli.main(["--filter", "a", "--items", str(tmp_path / "nope.json"), *no_user_config])

        assert code == 1
        assert "Error loading items" in capsys.readouterr().err

    def test_invalid_config(self, capsys, tmp_path):
        """Test that an invalid configuration exits 1."""
        config = tmp_path / "config.yaml"
        config.write_text("launcher:\n  max_visible_items: 0\n")

        code = cli.main(["--config", str(config), "--config-dir", str(tmp_path), "-f", "a"])

        assert code == 1
        assert "Error loading configuration" in capsys.readouterr().err

    def test_bad_max_items(self, capsys, no_user_config):
        """Test that --max-items must be positive."""
        assert cli.main(["--max-items", "0", *no_user_config]) == 1


class TestInteractive:
    """Tests for the interactive path with the launcher faked out."""

    def test_submitted(self, capsys, fake_launcher, items_file, no_user_config):
        """Test printing a submitted outcome."""
        fake_launcher.outcome = LauncherResult(
            action=LauncherAction.SUBMITTED, query="al", selected_item=Item(id="a", title="Alpha")
        )

        code = cli.main(["Find...", "--items", str(items_file), "--theme", "dark", *no_user_config])

        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["action: submitted", "query: al", "id: a"]
        assert fake_launcher.calls["placeholder"] == "Find..."
        assert fake_launcher.calls["theme"] == "dark"
        assert [item.id for item in fake_launcher.calls["items"]] == ["a", "b", "c"]

    def test_json(self, capsys, fake_launcher, no_user_config):
        """Test JSON output."""
        fake_launcher.outcome = LauncherResult(action=LauncherAction.OPTION, query="x")

        code = cli.main(["--json", *no_user_config])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {
            "action": "option",
            "query": "x",
            "selected_item": None,
        }

    def test_dismissed(self, capsys, fake_launcher, no_user_config):
        """Test that dismissal exits 1."""
        assert cli.main(no_user_config) == 1
        assert capsys.readouterr().out.splitlines()[0] == "action: dismissed"

    def test_keyboard_interrupt(self, fake_launcher, no_user_config):
        """Test that an interrupt exits 130."""
        fake_launcher.outcome = KeyboardInterrupt()

        assert cli.main(no_user_config) == 130

    def test_options_applied(self, fake_launcher, no_user_config):
        """Test that command-line options reach the configuration."""
        cli.main(["--no-color", "--max-items", "4", *no_user_config])

        config = fake_launcher.calls["config"]
        assert config.launcher.color is False
        assert config.launcher.max_visible_items == 4
