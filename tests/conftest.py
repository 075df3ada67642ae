"""
Pytest configuration and shared fixtures for nom tests.
"""

import pytest

# Import test fixtures to make them available to all tests
# ruff: noqa: F401
from tests.fixtures.archives import (
    make_tar_gz,
    hello_archive,
)
from tests.fixtures.directories import (
    install_root,
    nom_config,
    reset_platform_cache,
)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )
