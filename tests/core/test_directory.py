"""
Unit tests for nom.core.directory module.

Tests cover:
- Home directory and install root resolution
- Install path creation and idempotency
- Install completion markers
- Error handling
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from nom.core.directory import (
    INSTALL_NAMESPACE,
    clear_installed,
    get_home_dir,
    get_install_path,
    get_install_root,
    get_marker_path,
    is_installed,
    mark_installed,
    resolve_install_path,
)
from nom.core.exceptions import DirectoryCreationFailed, FileWriteFailed, NoHomeDirectory


class TestGetInstallRoot:
    """Tests for get_install_root function."""

    def test_explicit_home(self):
        """Test install root is <home>/.nom."""
        assert get_install_root(Path("/tmp/home")) == Path("/tmp/home") / INSTALL_NAMESPACE

    def test_string_home(self):
        """Test a string home is accepted."""
        assert get_install_root("/tmp/home") == Path("/tmp/home/.nom")

    def test_detected_home(self):
        """Test the user's home is used when none is given."""
        if os.name == "nt":
            pytest.skip("Cannot test PosixPath on Windows")
        with patch("pathlib.Path.home", return_value=Path("/home/testuser")):
            assert get_install_root() == Path("/home/testuser/.nom")

    def test_no_home_directory(self):
        """Test NoHomeDirectory when the home cannot be found."""
        if os.name == "nt":
            pytest.skip("POSIX home lookup only")
        with patch("pathlib.Path.home", side_effect=RuntimeError("no home")):
            with pytest.raises(NoHomeDirectory):
                get_install_root()

    def test_windows_missing_userprofile(self):
        """Test error when USERPROFILE is not set on Windows."""
        with patch("os.name", "nt"):
            with patch.dict(os.environ, {}, clear=True):
                with pytest.raises(NoHomeDirectory) as exc_info:
                    get_home_dir()
                assert "USERPROFILE" in str(exc_info.value)


class TestResolveInstallPath:
    """Tests for resolve_install_path function."""

    def test_composes_root_and_version(self, tmp_path):
        """Test path ends with <namespace>/<version>."""
        root = get_install_root(tmp_path / "home")
        path = resolve_install_path("v1.0.0", root)

        assert path.parts[-2:] == (".nom", "v1.0.0")
        assert path == tmp_path / "home" / ".nom" / "v1.0.0"

    def test_creates_missing_ancestors(self, install_root):
        """Test the directory and all ancestors are created."""
        assert not install_root.exists()

        path = resolve_install_path("v1.0.0", install_root)

        assert path.is_dir()
        assert install_root.is_dir()

    def test_idempotent(self, install_root):
        """Test a second call returns the same path without creating anything."""
        first = resolve_install_path("v1.0.0", install_root)
        (first / "marker").write_text("x")

        with patch.object(Path, "mkdir") as mock_mkdir:
            second = resolve_install_path("v1.0.0", install_root)

        assert first == second
        mock_mkdir.assert_not_called()
        assert (second / "marker").read_text() == "x"

    def test_creation_failure(self, install_root):
        """Test OS errors become DirectoryCreationFailed."""
        error = PermissionError("denied")
        with patch.object(Path, "mkdir", side_effect=error):
            with pytest.raises(DirectoryCreationFailed) as exc_info:
                resolve_install_path("v1.0.0", install_root)

        assert exc_info.value.os_error is error
        assert exc_info.value.exit_code == 11

    def test_existing_file_rejected(self, install_root):
        """Test a regular file at the install path is an error."""
        install_root.mkdir(parents=True)
        (install_root / "v1.0.0").write_text("not a dir")

        with pytest.raises(DirectoryCreationFailed):
            resolve_install_path("v1.0.0", install_root)


class TestIsInstalled:
    """Tests for is_installed function."""

    def test_missing(self, install_root):
        assert is_installed("v1.0.0", install_root) is False

    def test_empty_directory(self, install_root):
        """Test an empty directory does not count as installed."""
        get_install_path("v1.0.0", install_root).mkdir(parents=True)
        assert is_installed("v1.0.0", install_root) is False

    def test_populated_without_marker(self, install_root):
        """Test leftovers of a failed unpack do not count as installed."""
        path = get_install_path("v1.0.0", install_root)
        path.mkdir(parents=True)
        (path / "bin").mkdir()
        assert is_installed("v1.0.0", install_root) is False

    def test_populated_with_marker(self, install_root):
        path = get_install_path("v1.0.0", install_root)
        path.mkdir(parents=True)
        (path / "bin").mkdir()
        mark_installed("v1.0.0", install_root)
        assert is_installed("v1.0.0", install_root) is True

    def test_marker_without_directory(self, install_root):
        """Test a removed version directory is not reported as installed."""
        mark_installed("v1.0.0", install_root)
        assert is_installed("v1.0.0", install_root) is False


class TestInstallMarkers:
    """Tests for mark_installed and clear_installed."""

    def test_marker_outside_version_directory(self, install_root):
        marker = mark_installed("v1.0.0", install_root)

        assert marker == get_marker_path("v1.0.0", install_root)
        assert marker.is_file()
        assert not get_install_path("v1.0.0", install_root).exists()

    def test_clear(self, install_root):
        mark_installed("v1.0.0", install_root)
        clear_installed("v1.0.0", install_root)
        assert not get_marker_path("v1.0.0", install_root).exists()

    def test_clear_missing_is_noop(self, install_root):
        clear_installed("v1.0.0", install_root)

    def test_mark_failure(self, install_root):
        """Test OS errors become FileWriteFailed."""
        with patch.object(Path, "touch", side_effect=PermissionError("denied")):
            with pytest.raises(FileWriteFailed):
                mark_installed("v1.0.0", install_root)
