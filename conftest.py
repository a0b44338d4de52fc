import pytest
from grafter.needle import needle
from grafter.test_utils import SpyBus, WorkspaceFactory


@pytest.fixture
def workspace_factory(tmp_path, monkeypatch):
    # Use a fixture to ensure a clean workspace and chdir for each test
    factory = WorkspaceFactory(tmp_path)
    monkeypatch.chdir(tmp_path)
    return factory


@pytest.fixture
def spy_bus(monkeypatch):
    spy = SpyBus()
    with spy.patch(monkeypatch):
        yield spy


@pytest.fixture(autouse=True)
def isolated_needle(monkeypatch):
    # The CLI registers every workspace it runs in as a message override root.
    monkeypatch.setattr(needle, "roots", list(needle.roots))
    yield
    needle.reload()
