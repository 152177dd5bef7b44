# conftest.py
import matplotlib
import pytest

from c1fem.config import DEBUG_ENV, ELEVATED_DPS_ENV


@pytest.fixture(autouse=True)
def mpl_test_backend():
    """Switch to a non-interactive backend for all tests."""
    matplotlib.use('Agg')


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Ignore C1FEM_* settings of the calling shell."""
    monkeypatch.delenv(ELEVATED_DPS_ENV, raising=False)
    monkeypatch.delenv(DEBUG_ENV, raising=False)
