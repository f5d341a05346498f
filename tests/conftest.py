import sys
from pathlib import Path

import pytest

# Ensure the `nearby_eats` package is importable when running pytest from the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nearby_eats.core import config  # noqa: E402


_NO_BODY = object()


class DummyResponse:
    def __init__(self, status_code=200, payload=_NO_BODY, json_error=None):
        self.status_code = status_code
        self._payload = {} if payload is _NO_BODY else payload
        self._json_error = json_error

    @property
    def ok(self):
        return self.status_code < 400

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError("http error")

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class DummySession:
    def __init__(self, response=None, error=None, on_get=None):
        self.calls = []
        self.response = response
        self.error = error
        self.on_get = on_get

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.on_get is not None:
            self.on_get()
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def clear_settings_cache():
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
