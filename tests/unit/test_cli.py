"""
Unit tests for the command line entry point.
"""

import pytest

from statichttp.__main__ import build_config, build_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("HTTP_PORT", "HTTP_ROOT_DIR", "HTTP_CONTENT_TYPE_HEADER", "HTTP_MIME_TABLE"):
        monkeypatch.delenv(name, raising=False)


def parse(*argv):
    return build_config(build_parser().parse_args(list(argv)))


class TestBuildConfig:
    """Tests for turning arguments into a ServerConfig."""

    def test_no_arguments(self):
        config = parse()

        assert config.root_dir == "../public"
        assert config.port == 8585
        assert config.content_type_header == "ContentType"

    def test_overrides(self):
        config = parse(
            "./site", "--host", "127.0.0.1", "-p", "3000",
            "-t", "1.5", "-c", "8", "-m", "web", "-l", "DEBUG", "--log-format", "json",
        )

        assert config.root_dir == "./site"
        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.timeout == 1.5
        assert config.max_connections == 8
        assert config.mime_table == "web"
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_standard_headers(self):
        assert parse("--standard-headers").content_type_header == "Content-Type"

    def test_flags_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("HTTP_PORT", "9000")

        assert parse().port == 9000
        assert parse("--port", "9001").port == 9001

    def test_unknown_mime_table_rejected(self):
        with pytest.raises(SystemExit):
            parse("--mime-table", "nope")


class TestMain:
    """Tests for main()."""

    def test_missing_root_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing")])

        assert exc_info.value.code == 2
        assert "missing" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "statichttp" in capsys.readouterr().out

    def test_bad_environment_exits(self, monkeypatch, capsys):
        """Test that an unparsable HTTP_PORT is reported as a usage error."""
        monkeypatch.setenv("HTTP_PORT", "eighty")

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
        assert "eighty" in capsys.readouterr().err
