# conftest.py (repo root)
import pytest


@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("LOGS_TABLE_NAME", "Logs")
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("LOG_TIMESTAMP_POLICY", raising=False)
    monkeypatch.delenv("AWS_EXECUTION_ENV", raising=False)
