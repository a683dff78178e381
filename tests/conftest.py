"""
Shared pytest fixtures for all tests.

Provides extension registry isolation and form-building helpers.
"""

import pytest

from replicator.core.config import reset_settings
from replicator.dynamic import register, reset_registration
from replicator.forms import Form


# =============================================================================
# ISOLATION FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def isolate_extensions(monkeypatch):
    """
    Automatically isolate extension registration for all tests.

    Each test starts with the default bindings installed and settings
    re-read from a clean environment.
    """
    for var in (
        "REPLICATOR_DYNAMIC_METHOD",
        "REPLICATOR_REMOVE_METHOD",
        "REPLICATOR_CREATE_METHOD",
        "REPLICATOR_LOG_LEVEL",
        "REPLICATOR_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    reset_registration()
    register()

    yield

    reset_registration()
    reset_settings()


# =============================================================================
# FORM FIXTURES
# =============================================================================

def phone_row(row):
    """Row factory used across tests: one text field and a remove button."""
    row.add_text("number")
    row.add_submit("remove", "Remove").add_remove_on_click()


@pytest.fixture
def make_form():
    """Build a form; pass ``http_data`` to simulate a postback."""

    def _make(http_data=None, name="profile"):
        return Form(name, http_data=http_data)

    return _make


@pytest.fixture
def row_factory():
    return phone_row
