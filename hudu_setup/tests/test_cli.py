"""
Tests for the command-line interface.
"""

import builtins
import os

import pytest

from hudu_setup import cli
from hudu_setup.cli import create_parser, main
from hudu_setup.config.writer import ConfigWriter


@pytest.fixture(autouse=True)
def wide_terminal(monkeypatch):
    """Keep Rich from wrapping long temp paths across lines."""
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def answers_file(temp_dir):
    path = os.path.join(temp_dir, "answers.yaml")
    with open(path, "w") as f:
        f.write("subdomain: hudu\ndomain: example.com\nstorage: local\n")
    return path


@pytest.fixture
def no_input(monkeypatch):
    def closed(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", closed)


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.output == ".env"
        assert args.config is None
        assert args.check is None
        assert not args.dry_run

    def test_check_without_path(self):
        args = create_parser().parse_args(["--check"])
        assert args.check == ""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "1.0.0" in capsys.readouterr().out


class TestMain:
    """Tests for main entry point."""

    def test_list_steps(self, capsys):
        assert main(["--list-steps"]) == 0
        out = capsys.readouterr().out
        for name in ("domain", "storage", "secrets", "environment"):
            assert name in out
        assert "DOMAIN, URL, SUBDOMAINS" in out
        assert "SECRET_KEY_BASE, PASSWORD_KEY, TWO_FACTOR_KEY" in out

    def test_verbose_keeps_json_log_format(self, monkeypatch):
        calls = []
        monkeypatch.setenv("HUDU_SETUP_LOG_FORMAT", "json")
        monkeypatch.setattr(cli, "configure_logging", lambda *a, **kw: calls.append((a, kw)))

        assert main(["--verbose", "--list-steps"]) == 0
        assert calls == [(("DEBUG",), {"json_output": True})]

    def test_non_interactive_run(self, temp_dir, answers_file, no_input, capsys):
        output = os.path.join(temp_dir, ".env")

        assert main(["--config", answers_file, "--output", output, "--no-color"]) == 0
        assert os.path.exists(output)

    def test_dry_run(self, temp_dir, answers_file, no_input, capsys):
        output = os.path.join(temp_dir, ".env")

        assert main(["-c", answers_file, "-o", output, "--dry-run"]) == 0
        assert not os.path.exists(output)
        assert "DOMAIN='hudu.example.com'" in capsys.readouterr().out

    def test_force_overwrites(self, temp_dir, answers_file, no_input):
        output = os.path.join(temp_dir, ".env")
        with open(output, "w") as f:
            f.write("OLD='1'\n")

        assert main(["-c", answers_file, "-o", output, "--force", "-q"]) == 0
        with open(output) as f:
            assert "OLD" not in f.read()

    def test_closed_input(self, temp_dir, no_input, capsys):
        output = os.path.join(temp_dir, ".env")

        assert main(["-o", output]) == 1
        assert "Cancelled." in capsys.readouterr().out
        assert not os.path.exists(output)

    def test_missing_answers_file(self, temp_dir, capsys):
        assert main(["-c", os.path.join(temp_dir, "nope.yaml")]) == 1
        assert "not found" in capsys.readouterr().out

    def test_entropy_failure(self, temp_dir, answers_file, monkeypatch, capsys):
        import secrets

        def broken(n):
            raise OSError("no entropy")

        monkeypatch.setattr(secrets, "token_bytes", broken)
        output = os.path.join(temp_dir, ".env")

        assert main(["-c", answers_file, "-o", output]) == 1
        assert "Refusing to write weak secrets" in capsys.readouterr().out
        assert not os.path.exists(output)


class TestCheck:
    """Tests for --check."""

    def write_env(self, temp_dir, config):
        ConfigWriter(temp_dir).write_all(config)
        return os.path.join(temp_dir, ".env")

    def test_valid_file(self, temp_dir, local_config, capsys):
        path = self.write_env(temp_dir, local_config)

        assert main(["--check", path]) == 0
        assert "36 keys present" in capsys.readouterr().out

    def test_uses_output_path(self, temp_dir, local_config):
        path = self.write_env(temp_dir, local_config)
        assert main(["-o", path, "--check"]) == 0

    def test_world_readable(self, temp_dir, local_config, capsys):
        path = self.write_env(temp_dir, local_config)
        os.chmod(path, 0o644)

        assert main(["--check", path]) == 1
        assert "chmod 600" in capsys.readouterr().out

    def test_missing_keys(self, temp_dir, capsys):
        path = os.path.join(temp_dir, ".env")
        with open(path, "w") as f:
            f.write("DOMAIN='hudu.example.com'\n")
        os.chmod(path, 0o600)

        assert main(["--check", path]) == 1
        out = capsys.readouterr().out
        assert "Missing keys" in out
        assert "SECRET_KEY_BASE" in out

    def test_missing_file(self, temp_dir, capsys):
        assert main(["--check", os.path.join(temp_dir, "none.env")]) == 1
        assert "does not exist" in capsys.readouterr().out
