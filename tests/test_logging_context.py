"""Tests for logging context propagation."""

import pytest

from resource_normalizer.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


def test_empty_context():
    assert get_log_context() == {}


def test_push_and_pop():
    """Test pushing fields and restoring the previous context."""
    token = push_log_context(resource_type="article", request_url="/api/articles")
    assert get_log_context() == {"resource_type": "article", "request_url": "/api/articles"}

    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_pushes():
    """Test nested pushes and pops in reverse order."""
    outer = push_log_context(request_url="/api/articles")
    inner = push_log_context(resource_type="article")
    assert get_log_context() == {"request_url": "/api/articles", "resource_type": "article"}

    pop_log_context(inner)
    assert get_log_context() == {"request_url": "/api/articles"}

    pop_log_context(outer)
    assert get_log_context() == {}


def test_inner_value_shadows_outer():
    outer = push_log_context(resource_type="articles")
    inner = push_log_context(resource_type="article")
    assert get_log_context() == {"resource_type": "article"}

    pop_log_context(inner)
    assert get_log_context() == {"resource_type": "articles"}
    pop_log_context(outer)


def test_context_manager_nested():
    """Test nested context managers."""
    with log_context(request_url="/api/articles"):
        with log_context(resource_type="comment"):
            assert get_log_context() == {"request_url": "/api/articles", "resource_type": "comment"}

        assert get_log_context() == {"request_url": "/api/articles"}

    assert get_log_context() == {}


def test_context_manager_restores_on_exception():
    """Test that context is restored even when an exception occurs."""
    with pytest.raises(ValueError):
        with log_context(resource_type="article"):
            raise ValueError("malformed payload")

    assert get_log_context() == {}


def test_context_manager_does_not_swallow_exceptions():
    context = log_context(resource_type="article")
    context.__enter__()
    assert context.__exit__(ValueError, ValueError("x"), None) is False
    assert get_log_context() == {}


def test_clear_context():
    push_log_context(resource_type="article", request_url="/api/articles")
    clear_log_context()
    assert get_log_context() == {}


def test_get_returns_copy():
    """Test that get_log_context returns a copy, not the active dict."""
    token = push_log_context(resource_type="tag")

    context = get_log_context()
    context["request_url"] = "modified"

    assert get_log_context() == {"resource_type": "tag"}
    pop_log_context(token)
