"""Tests for logging context propagation."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from station_ranker.logging.context import (
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
    """Test that context starts empty."""
    assert get_log_context() == {}


def test_push_and_pop():
    """Test pushing fields and restoring with the token."""
    token = push_log_context(run_id="abc123", generation=2)
    assert get_log_context() == {"run_id": "abc123", "generation": 2}
    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context():
    """Test nested pushes merge and pop in reverse order."""
    token1 = push_log_context(run_id="abc123")
    token2 = push_log_context(generation=1)
    assert get_log_context() == {"run_id": "abc123", "generation": 1}

    pop_log_context(token2)
    assert get_log_context() == {"run_id": "abc123"}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_inner_push_overrides_key():
    """Test that an inner push overrides a key and the pop restores it."""
    token1 = push_log_context(generation=1)
    token2 = push_log_context(generation=2)
    assert get_log_context()["generation"] == 2

    pop_log_context(token2)
    assert get_log_context()["generation"] == 1
    pop_log_context(token1)


def test_get_returns_copy():
    """Test that mutating the returned dict does not change the context."""
    with log_context(run_id="abc123"):
        context = get_log_context()
        context["run_id"] = "tampered"

        assert get_log_context()["run_id"] == "abc123"


def test_context_manager_restores_on_exit():
    """Test log_context restores the previous context."""
    with log_context(run_id="abc123"):
        with log_context(generation=3):
            assert get_log_context() == {"run_id": "abc123", "generation": 3}
        assert get_log_context() == {"run_id": "abc123"}
    assert get_log_context() == {}


def test_context_manager_restores_on_exception():
    """Test log_context restores the context and lets the exception propagate."""
    with pytest.raises(RuntimeError):
        with log_context(run_id="abc123"):
            raise RuntimeError("boom")

    assert get_log_context() == {}


def test_threads_do_not_share_context():
    """Test that a worker thread does not see the caller's fields."""
    seen = {}

    def worker():
        seen["context"] = get_log_context()

    with log_context(run_id="main-thread"):
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

    assert "run_id" not in seen["context"]


def test_concurrent_runs_keep_their_own_fields():
    """Test concurrent ranking runs on a pool each see only their own run_id."""
    barrier = threading.Barrier(2)

    def run(run_id):
        with log_context(run_id=run_id):
            barrier.wait(timeout=5)
            return get_log_context()["run_id"]

    with ThreadPoolExecutor(max_workers=2) as executor:
        results = list(executor.map(run, ["run-a", "run-b"]))

    assert results == ["run-a", "run-b"]


def test_none_fields_are_not_recorded():
    """Test that a None field is skipped and removes an inherited key."""
    with log_context(run_id="abc123", generation=None):
        assert get_log_context() == {"run_id": "abc123"}
        with log_context(run_id=None, session_id="s1"):
            assert get_log_context() == {"session_id": "s1"}
        assert get_log_context() == {"run_id": "abc123"}


def test_context_manager_yields_merged_fields():
    with log_context(session_id="s1"):
        with log_context(run_id="abc123") as fields:
            assert fields == {"session_id": "s1", "run_id": "abc123"}
