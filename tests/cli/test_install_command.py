"""
Tests for the install command.
"""

import pytest
import responses
from requests.exceptions import ConnectionError as RequestsConnectionError

from nom.cli.parser import CLI
from nom.core.directory import mark_installed

URL = "https://nodejs.org/dist/v1.0.0/node-v1.0.0-darwin-x64.tar.gz"


@pytest.fixture
def run_cli(install_root, monkeypatch):
    """Run the CLI against a temporary install root on darwin-x64."""
    monkeypatch.delenv("NOM_HOME", raising=False)
    monkeypatch.delenv("NOM_DIST_URL", raising=False)
    monkeypatch.delenv("NOM_PLATFORM", raising=False)

    def run(*args):
        return CLI().run(
            ["--install-root", str(install_root), "install", *args, "--platform", "darwin-x64"]
        )

    return run


class TestInstallCommand:
    """Test install command execution."""

    def test_no_version_supplied(self, capsys, install_root):
        """Test a missing version prints a prompt and exits successfully."""
        result = CLI().run(["--install-root", str(install_root), "install"])

        assert result == 0
        assert "No version supplied" in capsys.readouterr().out
        assert not install_root.exists()

    @responses.activate
    def test_install_success(self, run_cli, install_root, hello_archive, capsys):
        responses.add(responses.GET, URL, body=hello_archive, status=200)

        result = run_cli("v1.0.0")

        assert result == 0
        assert (install_root / "v1.0.0" / "a.txt").read_text() == "hello"
        assert "Installed node.js v1.0.0" in capsys.readouterr().out

    @responses.activate
    def test_install_with_version_option(self, run_cli, install_root, hello_archive):
        responses.add(responses.GET, URL, body=hello_archive, status=200)

        assert run_cli("-v", "v1.0.0") == 0
        assert (install_root / "v1.0.0" / "a.txt").read_text() == "hello"

    @responses.activate
    def test_already_installed(self, run_cli, install_root, capsys):
        (install_root / "v1.0.0").mkdir(parents=True)
        (install_root / "v1.0.0" / "bin").mkdir()
        mark_installed("v1.0.0", install_root)

        assert run_cli("v1.0.0") == 0
        assert "already installed" in capsys.readouterr().out

    @responses.activate
    def test_network_error_exit_code(self, run_cli, capsys):
        """Test failures map to an exit code and a message on stderr."""
        responses.add(responses.GET, URL, body=RequestsConnectionError("unreachable"))

        result = run_cli("v1.0.0")

        assert result == 20
        assert "unreachable" in capsys.readouterr().err

    @responses.activate
    def test_not_found_exit_code(self, run_cli):
        responses.add(responses.GET, URL, status=404)

        assert run_cli("v1.0.0") == 21

    @responses.activate
    def test_corrupt_archive_exit_code(self, run_cli):
        responses.add(responses.GET, URL, body=b"garbage", status=200)

        assert run_cli("v1.0.0") == 30

    def test_invalid_version_exit_code(self, run_cli, install_root):
        assert run_cli("../evil") == 2
        assert not install_root.exists()

    def test_unsupported_platform_exit_code(self, install_root):
        result = CLI().run(
            ["--install-root", str(install_root), "install", "v1.0.0", "--platform", "sunos-x64"]
        )

        assert result == 4

    def test_invalid_config_exit_code(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("timeout: never\n")

        result = CLI().run(
            ["--config", str(config_file), "--install-root", str(tmp_path), "install", "v1.0.0"]
        )

        assert result == 3

    def test_wrong_typed_install_root_exit_code(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NOM_HOME", raising=False)
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("install_root: 5\n")

        result = CLI().run(["--config", str(config_file), "install", "v1.0.0"])

        assert result == 3
