"""
Tests for the dotenv serializer and configuration writer.
"""

import os
import stat

import pytest

from hudu_setup.config.loader import parse_env_text, unescape_value
from hudu_setup.config.writer import (
    ConfigWriter,
    EnvDocument,
    EnvSection,
    build_document,
    escape_value,
    format_entry,
    render_document,
    section_banner,
)
from hudu_setup.errors import EnvWriteError
from hudu_setup.validators.env_file import RECOGNIZED_KEYS


class TestEscapeValue:
    """Tests for escape_value and format_entry."""

    def test_empty_value(self):
        assert escape_value("") == "''"

    def test_plain_value(self):
        assert escape_value("hudu.example.com") == "'hudu.example.com'"

    def test_single_quote_uses_quote_break(self):
        assert escape_value("it's") == "'it'\"'\"'s'"

    def test_only_quote(self):
        assert escape_value("'") == "''\"'\"''"

    def test_no_interpretation_of_other_characters(self):
        value = 'a "b" $HOME `x` \\n #c'
        assert escape_value(value) == f"'{value}'"

    def test_format_entry_empty(self):
        assert format_entry("K", "") == "K=''\n"

    def test_format_entry_value(self):
        assert format_entry("S3_BUCKET", "mybucket") == "S3_BUCKET='mybucket'\n"

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "'",
            "''",
            "it's a 'test'",
            "  leading and trailing  ",
            "tab\tseparated",
            "multi\nline\nvalue",
            "back\\slash and \"double\"",
            "# not a comment",
            "ünïcødé ✓",
        ],
    )
    def test_round_trip(self, value):
        assert unescape_value(escape_value(value)) == value

    def test_round_trip_through_file_parser(self):
        values = {"A": "x'y", "B": "", "C": "line1\nline2", "D": "  spaced  "}
        text = "".join(format_entry(k, v) for k, v in values.items())
        assert parse_env_text(text) == values


class TestEnvDocument:
    """Tests for EnvDocument and render_document."""

    def test_rejects_duplicate_keys(self):
        with pytest.raises(ValueError, match="Duplicate"):
            EnvDocument(
                title="t",
                sections=(
                    EnvSection.of("A", [("KEY", "1")]),
                    EnvSection.of("B", [("KEY", "2")]),
                ),
            )

    def test_rejects_invalid_key(self):
        with pytest.raises(ValueError):
            EnvDocument(title="t", sections=(EnvSection.of(None, [("bad-key", "1")]),))

    def test_render_layout(self, fixed_time):
        document = EnvDocument(
            title="Title",
            sections=(
                EnvSection.of("First", [("B", "2"), ("A", "1")]),
                EnvSection.of(None, [("C", "")]),
            ),
            comments=("Docs: here",),
        )
        content = render_document(document, fixed_time)

        assert content == (
            "# Title\n"
            "# Generated: 2024-01-02 03:04:05\n"
            "# Docs: here\n"
            "\n"
            f"{section_banner('First')}\n"
            "B='2'\n"
            "A='1'\n"
            "\n"
            "C=''\n"
        )

    def test_section_banner(self):
        assert section_banner("Core") == "# ── Core " + "─" * 42
        assert len(section_banner("Storage")) == 52

    def test_render_is_deterministic(self, local_config, fixed_time):
        document = build_document(local_config)
        assert render_document(document, fixed_time) == render_document(document, fixed_time)

    def test_replace_values_keeps_layout(self, local_config):
        document = build_document(local_config)
        masked = document.replace_values({"PASSWORD_KEY": "***"})
        assert masked.keys() == document.keys()
        assert masked.as_dict()["PASSWORD_KEY"] == "***"


class TestBuildDocument:
    """Tests for the Hudu key layout."""

    def test_emits_every_recognized_key_in_order(self, local_config):
        document = build_document(local_config)
        assert tuple(document.keys()) == RECOGNIZED_KEYS

    def test_local_storage_scenario(self, local_config):
        content = render_document(build_document(local_config))

        assert "DOMAIN='hudu.example.com'\n" in content
        assert "URL='example.com'\n" in content
        assert "SUBDOMAINS='hudu'\n" in content
        assert "USE_LOCAL_FILESYSTEM='true'\n" in content
        assert "S3_BUCKET=''\n" in content
        assert "S3_SECRET_ACCESS_KEY=''\n" in content

    def test_cloud_storage_scenario(self, s3_config):
        content = render_document(build_document(s3_config))

        assert "S3_BUCKET='mybucket'\n" in content
        assert "S3_REGION='us-east-1'\n" in content
        assert "USE_LOCAL_FILESYSTEM='false'\n" in content
        assert "S3_ENDPOINT=''\n" in content
        assert "S3_SECRET_ACCESS_KEY='wJalr'\"'\"'XUtnFEMI/K7MDENG'\n" in content

    def test_defaults(self, local_config):
        values = build_document(local_config).as_dict()

        assert values["DB_HOST"] == "db"
        assert values["DB_NAME"] == "hudu_production"
        assert values["DB_PASSWORD"] == ""
        assert values["POSTGRES_HOST_AUTH_METHOD"] == "trust"
        assert values["SMTP_STARTTLS_AUTO"] == "true"
        assert values["SMTP_ADDRESS"] == ""
        assert values["AUTHENTICATE_UPLOADS"] == "true"
        assert values["PUID"] == "1000"
        assert values["RAILS_MAX_THREADS"] == "3"
        assert values["REDIS_URL"] == "redis://redis"

    def test_secrets_are_placed_in_core_section(self, local_config, fixed_secrets):
        document = build_document(local_config)
        core = document.sections[0]
        assert core.title == "Core"
        assert [e.value for e in core.entries] == [
            fixed_secrets.secret_key_base,
            fixed_secrets.password_key,
            fixed_secrets.two_factor_key,
        ]


class TestConfigWriter:
    """Tests for ConfigWriter class."""

    def test_write_creates_owner_only_file(self, temp_dir, local_config):
        writer = ConfigWriter(temp_dir)
        result = writer.write_all(local_config)

        path = os.path.join(temp_dir, ".env")
        assert result.success is True
        assert result.files_written == [path]
        assert stat.S_IMODE(os.stat(path).st_mode) & 0o077 == 0

    def test_write_content_parses_back(self, temp_dir, s3_config):
        writer = ConfigWriter(temp_dir)
        writer.write_all(s3_config)

        with open(os.path.join(temp_dir, ".env"), encoding="utf-8") as f:
            values = parse_env_text(f.read())

        assert values == build_document(s3_config).as_dict()

    def test_overwrite_tightens_permissions(self, temp_dir, local_config):
        path = os.path.join(temp_dir, ".env")
        with open(path, "w") as f:
            f.write("OLD=1\n")
        os.chmod(path, 0o644)

        ConfigWriter(temp_dir).write_all(local_config)

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
        with open(path) as f:
            assert "OLD=1" not in f.read()

    def test_failed_write_leaves_existing_file(self, temp_dir, local_config, monkeypatch):
        path = os.path.join(temp_dir, ".env")
        with open(path, "w") as f:
            f.write("OLD=1\n")

        def broken_replace(src, dst):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", broken_replace)
        result = ConfigWriter(temp_dir).write_all(local_config)

        assert result.success is False
        assert "No space left on device" in result.errors[0]
        with open(path) as f:
            assert f.read() == "OLD=1\n"
        assert os.listdir(temp_dir) == [".env"]

    def test_write_document_raises_env_write_error(self, temp_dir, local_config, monkeypatch):
        def broken_replace(src, dst):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(os, "replace", broken_replace)
        writer = ConfigWriter(temp_dir)
        with pytest.raises(EnvWriteError) as excinfo:
            writer.write_document(build_document(local_config))
        assert "Permission denied" in str(excinfo.value)

    def test_absolute_path(self, temp_dir, local_config):
        target = os.path.join(temp_dir, "nested", "hudu.env")
        result = ConfigWriter("/nonexistent").write_all(local_config, target)

        assert result.success is True
        assert os.path.exists(target)

    def test_dry_run_mode(self, temp_dir, local_config):
        writer = ConfigWriter(temp_dir, dry_run=True)
        result = writer.write_all(local_config)

        assert result.success is True
        assert result.files_written == []
        assert len(result.changes) == 1
        assert "DOMAIN='hudu.example.com'" in result.changes[0].content
        assert not os.path.exists(os.path.join(temp_dir, ".env"))
