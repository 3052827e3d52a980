import pytest
from click.testing import CliRunner

from texmark.config import reset_config


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _default_config():
    """Keep tests from leaking config into each other."""
    yield
    reset_config()
