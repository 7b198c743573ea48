import os
import pytest

from kewpa_search.core.search.debounce import BaseScheduler, ScheduledCall


class ManualCall(ScheduledCall):
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.ran = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler(BaseScheduler):
    """Collects scheduled calls; tests fire them explicitly."""

    def __init__(self):
        self.calls = []

    def call_later(self, delay, callback):
        call = ManualCall(delay, callback)
        self.calls.append(call)
        return call

    @property
    def live_calls(self):
        return [c for c in self.calls if not c.cancelled and not c.ran]

    def run_pending(self):
        for call in self.live_calls:
            call.ran = True
            call.callback()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def dell_asset_row():
    return {"id": 1, "name": "Dell Laptop", "assetTag": "AST-001", "category": "ICT", "department": "Finance"}


@pytest.fixture
def clean_env():
    """Ensure config environment variables are clean before and after tests."""
    vars_to_clear = [
        "KEWPA_SEARCH_CONFIG_FILE",
        "KEWPA_SEARCH_CONFIG_DIR",
        "KEWPA_SEARCH_ENV"
    ]
    old_values = {}
    for v in vars_to_clear:
        old_values[v] = os.environ.get(v)
        if v in os.environ:
            del os.environ[v]

    yield

    for v, val in old_values.items():
        if val is not None:
            os.environ[v] = val
        elif v in os.environ:
            del os.environ[v]
