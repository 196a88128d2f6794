import pytest


@pytest.fixture(autouse=True)
def appdata(monkeypatch, tmp_path):
    """Keep config reads/writes inside a temporary directory."""
    monkeypatch.setenv("APPDATA", str(tmp_path))
    return tmp_path
