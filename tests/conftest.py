import pytest

from zumotest import bootstrap


@pytest.fixture(scope="session", autouse=True)
def setup_zumotest_registry() -> None:
    """Register builtin execution units once for the entire test session."""

    bootstrap()
