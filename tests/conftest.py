import pytest

from shapeguard.config import get_settings
from shapeguard.validation import (
    ValidationError,
    ValidationErrorDetail,
    validate_or_errors,
    validate_or_none,
    validate_or_raise,
)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Each test sees default settings, unaffected by the caller's environment."""
    for name in ("SHAPEGUARD_DISCARD_UNKNOWN_FIELDS", "SHAPEGUARD_MAX_SCHEMA_DEPTH"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _is_error_list(expected) -> bool:
    return isinstance(expected, list) and bool(expected) and isinstance(expected[0], ValidationErrorDetail)


def _check(schema, value, options, expected):
    if _is_error_list(expected):
        expected = sorted(expected)
        assert validate_or_none(schema, value, options) is None
        with pytest.raises(ValidationError) as exc_info:
            validate_or_raise(schema, value, options)
        assert sorted(exc_info.value.details) == expected
        assert sorted(validate_or_errors(schema, value, options)) == expected
    else:
        assert validate_or_raise(schema, value, options) == expected
        assert validate_or_none(schema, value, options) == expected
        assert validate_or_errors(schema, value, options) == expected


@pytest.fixture
def check():
    """Assert all three boundary wrappers agree with `expected`.

    `expected` is either the sanitized value or a list of ValidationErrorDetail,
    compared after sorting by (path, failure).
    """
    return _check


@pytest.fixture
def errs():
    """Build a list of ValidationErrorDetail from (path, failure) pairs."""
    return lambda *pairs: [ValidationErrorDetail(path, failure) for path, failure in pairs]
