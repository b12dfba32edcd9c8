import pytest

from policypass.errors import EntropySourceError


class ScriptedSource:
    """Returns a fixed list of draws in order; fails loudly when it runs out."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next_uint32(self):
        if not self.values:
            raise AssertionError("scripted random source exhausted")
        self.calls += 1
        return self.values.pop(0)


class CountingSource:
    """Returns 1, 2, 3, ... so slot keys never collide; counts draws."""

    def __init__(self):
        self.calls = 0

    def next_uint32(self):
        self.calls += 1
        return self.calls


class BrokenSource:
    def next_uint32(self):
        raise EntropySourceError("secure random source unavailable")


@pytest.fixture
def scripted():
    return ScriptedSource


@pytest.fixture
def counting_source():
    return CountingSource()


@pytest.fixture
def broken_source():
    return BrokenSource()


@pytest.fixture
def no_config(tmp_path, monkeypatch):
    """Point the settings lookup at a file that does not exist."""
    path = tmp_path / "missing" / "config.json"
    monkeypatch.setenv("POLICYPASS_CONFIG", str(path))
    return path
