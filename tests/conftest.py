import logging
import os
import threading

import pytest

# Set test environment variables
os.environ["SOFTLRU_LOG_LEVEL"] = "WARNING"
os.environ.pop("SOFTLRU_DEFAULT_CAPACITY", None)
os.environ.pop("SOFTLRU_LOG_EVICTIONS", None)

from softlru.core.config import get_settings  # noqa: E402
from softlru.utils.hooks import CacheHooks  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop memoized settings so env changes in one test never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


class RecordingHooks(CacheHooks):
    """Hooks that record every removal and optionally create/weigh values."""

    def __init__(self, create=None, weight_of=None):
        self._create_fn = create
        self._weight_fn = weight_of
        self.removed = []
        self._removed_lock = threading.Lock()

    def create(self, key):
        if self._create_fn is None:
            return None
        return self._create_fn(key)

    def weight_of(self, key, value):
        if self._weight_fn is None:
            return 1
        return self._weight_fn(key, value)

    def on_entry_removed(self, evicted, key, old_value, new_value):
        with self._removed_lock:
            self.removed.append((evicted, key, old_value, new_value))

    @property
    def evicted_keys(self):
        return [key for evicted, key, _, _ in self.removed if evicted]


@pytest.fixture
def recording_hooks():
    """Removal-recording hooks with unit weight and no creation."""
    return RecordingHooks()


@pytest.fixture
def hooks_factory():
    """Build RecordingHooks with custom create/weight callables."""
    return RecordingHooks
