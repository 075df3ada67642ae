"""
Unit tests for download URL construction.
"""

from nom.core.urls import NODE_DIST_URL, archive_name, build_url


class TestBuildUrl:
    """Test build_url function."""

    def test_darwin_x64_url(self):
        """Test the canonical URL for v1.0.0 on darwin-x64."""
        url = build_url("v1.0.0", "darwin-x64")
        assert url == "https://nodejs.org/dist/v1.0.0/node-v1.0.0-darwin-x64.tar.gz"

    def test_deterministic(self):
        """Test identical inputs give identical URLs."""
        assert build_url("v18.19.0", "linux-x64") == build_url("v18.19.0", "linux-x64")

    def test_platform_suffix_used(self):
        """Test the platform suffix appears in the artifact name."""
        url = build_url("v20.11.1", "linux-arm64")
        assert url.endswith("/v20.11.1/node-v20.11.1-linux-arm64.tar.gz")

    def test_custom_base_url(self):
        """Test a mirror base URL is honoured."""
        url = build_url("v1.0.0", "linux-x64", base_url="https://mirror.example.com/node")
        assert url == "https://mirror.example.com/node/v1.0.0/node-v1.0.0-linux-x64.tar.gz"

    def test_trailing_slash_stripped(self):
        """Test a trailing slash on the base URL does not double up."""
        url = build_url("v1.0.0", "linux-x64", base_url=NODE_DIST_URL + "/")
        assert "dist//" not in url


class TestArchiveName:
    """Test archive_name function."""

    def test_archive_name(self):
        """Test archive file name matches URL basename."""
        assert archive_name("v1.0.0", "darwin-x64") == "node-v1.0.0-darwin-x64.tar.gz"
