"""
Unit tests for resources.
"""

from pathlib import Path

import pytest

from statichttp.http.mime_types import DEFAULT_MIME_TYPES
from statichttp.resources import FileResource, Resource, StaticResource


class TestFileResource:
    """Tests for FileResource."""

    def test_get_data_returns_raw_bytes(self, public_dir: Path):
        resource = FileResource(public_dir / "sub" / "b.png")

        assert resource.get_data(None) == (public_dir / "sub" / "b.png").read_bytes()

    def test_get_data_ignores_query(self, public_dir: Path):
        resource = FileResource(public_dir / "a.html")

        assert resource.get_data("x=1") == resource.get_data(None)

    def test_get_data_reads_fresh(self, public_dir: Path):
        """Test that changes on disk are visible on the next read."""
        path = public_dir / "a.html"
        resource = FileResource(path)
        first = resource.get_data(None)

        path.write_bytes(b"changed")

        assert first != b"changed"
        assert resource.get_data(None) == b"changed"

    def test_mime_by_extension(self, public_dir: Path):
        assert FileResource(public_dir / "a.html").mime(DEFAULT_MIME_TYPES) == "text/html"
        assert FileResource(public_dir / "sub" / "b.png").mime(DEFAULT_MIME_TYPES) == "image/png"

    def test_mime_unknown_extension(self, public_dir: Path):
        assert FileResource(public_dir / "data.bin").mime(DEFAULT_MIME_TYPES) is None

    def test_mime_upper_case_extension(self, tmp_path: Path):
        """Test that "LOGO.PNG" does not match the ".png" entry."""
        (tmp_path / "LOGO.PNG").write_bytes(b"x")

        assert FileResource(tmp_path / "LOGO.PNG").mime(DEFAULT_MIME_TYPES) is None

    def test_mime_uses_given_table(self, public_dir: Path):
        resource = FileResource(public_dir / "data.bin")

        assert resource.mime({".bin": "application/octet-stream"}) == "application/octet-stream"

    def test_mime_missing_file(self, tmp_path: Path):
        """Test that a binding to a file that does not exist has no MIME type."""
        assert FileResource(tmp_path / "index.html").mime(DEFAULT_MIME_TYPES) is None

    def test_mime_is_stable_across_get_data(self, public_dir: Path):
        """Test that mime() gives the same answer before and after get_data()."""
        resource = FileResource(public_dir / "index.html")

        first = resource.mime(DEFAULT_MIME_TYPES)
        resource.get_data(None)
        second = resource.mime(DEFAULT_MIME_TYPES)

        assert first == second == "text/html"

    def test_get_data_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            FileResource(tmp_path / "gone.html").get_data(None)

    def test_equality_and_str(self, public_dir: Path):
        path = public_dir / "a.html"

        assert FileResource(path) == FileResource(str(path))
        assert str(FileResource(path)) == str(path)

    def test_satisfies_protocol(self, public_dir: Path):
        assert isinstance(FileResource(public_dir / "a.html"), Resource)


class TestStaticResource:
    """Tests for StaticResource."""

    def test_mime_from_extension(self):
        resource = StaticResource(b"<p>x</p>", extension=".html")

        assert resource.mime(DEFAULT_MIME_TYPES) == "text/html"

    def test_unknown_extension(self):
        assert StaticResource(b"x", extension=".txt").mime(DEFAULT_MIME_TYPES) is None

    def test_extension_case_matters(self):
        assert StaticResource(b"x", extension=".HTML").mime(DEFAULT_MIME_TYPES) is None

    def test_explicit_mime_type(self):
        resource = StaticResource("User-agent: *\n", mime_type="text/plain")

        assert resource.mime(DEFAULT_MIME_TYPES) == "text/plain"
        assert resource.get_data(None) == b"User-agent: *\n"

    def test_requires_extension_or_mime_type(self):
        with pytest.raises(ValueError):
            StaticResource(b"x")

    def test_satisfies_protocol(self):
        assert isinstance(StaticResource(b"x", mime_type="text/plain"), Resource)
