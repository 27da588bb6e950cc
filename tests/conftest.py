import pytest


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: needs a Docker daemon and the built application jar"
    )


@pytest.fixture(autouse=True)
def _no_os_arch_override(monkeypatch):
    monkeypatch.delenv("LSH_OS_ARCH", raising=False)
