import pytest
from fastapi.testclient import TestClient

from services.api_proxy.config import ProxyConfig
from services.api_proxy.main import create_app

UPSTREAM_BASE_URL = "https://upstream.test/api"
UPSTREAM_HOST = "upstream.test"


@pytest.fixture
def proxy_config() -> ProxyConfig:
    return ProxyConfig(
        _env_file=None,
        UPSTREAM_BASE_URL=UPSTREAM_BASE_URL,
        LOG_CONFIG_PATH="/tmp/api-proxy-missing-logging.yml",
    )


@pytest.fixture
def main_app(proxy_config):
    return create_app(proxy_config)


@pytest.fixture
def client(main_app):
    # Context manager runs the lifespan so app.state is populated.
    with TestClient(main_app) as test_client:
        yield test_client
