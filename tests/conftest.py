import pytest
from rich.console import Console

import argsieve


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def assert_parse():
    """Parse ``cmd`` against ``schema`` and assert it succeeds with ``expected``."""

    def inner(cmd, schema, expected):
        result, errors, _ = argsieve.parse(cmd, schema)
        assert errors is None, str(errors)
        assert result == expected

    return inner


@pytest.fixture
def parse_errors():
    """Parse ``cmd`` against ``schema``, assert it fails, and return the error report."""

    def inner(cmd, schema):
        result, errors, _ = argsieve.parse(cmd, schema)
        assert result is None
        assert errors
        return errors

    return inner
