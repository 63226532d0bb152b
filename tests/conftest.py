"""Shared fixtures for secretenv tests."""
from pathlib import Path

import pytest

from secretenv.secrets.domains.variable_store import VariableStore
from secretenv.secrets.workflows.secret_operations import SecretEnv


@pytest.fixture
def store():
    """Fixture providing an isolated, dict-backed variable store."""
    return VariableStore({})


@pytest.fixture
def env(store):
    """Fixture providing a SecretEnv writing into the isolated store."""
    return SecretEnv(store)


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Fixture to create a temporary home directory for testing."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)
    monkeypatch.delenv("SECRETENV_CONFIG", raising=False)
    return fake_home


@pytest.fixture
def db_payload():
    """A well-formed database_credentials payload."""
    return (
        '{"engine": "postgres", "username": "app", "password": "s3cret", '
        '"host": "db.internal", "dbname": "main", "port": "5432"}'
    )
