"""Root test configuration."""

import pytest


def pytest_addoption(parser):
    """Add integration option to pytest."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests against the live Enterprise API",
    )


@pytest.fixture()
def anyio_backend():
    """Run ``@pytest.mark.anyio`` tests on asyncio only."""
    return "asyncio"
