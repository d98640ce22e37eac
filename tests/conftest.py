import pytest

from fakes import FakeCloud, FakeSession


@pytest.fixture
def cloud():
    return FakeCloud()


@pytest.fixture
def session(cloud):
    return FakeSession(cloud)


@pytest.fixture
def settings(monkeypatch):
    """Replace the Dynaconf settings with a plain dict for the duration of a test."""
    values: dict = {
        "azure": {},
        "storage": {"default_sku": "Standard_LRS", "default_kind": "StorageV2"},
        "tags": {},
        "logging": {"level": "INFO"},
    }
    monkeypatch.setattr("provisioner.cli.get_config", lambda: values)
    monkeypatch.setattr("provisioner.connections.azure.get_config", lambda: values)
    return values


@pytest.fixture
def clients(session):
    session.authenticate()
    return session.connect("sub-1")
