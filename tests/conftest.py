"""Shared test fixtures."""

import pytest

from daraz_relay.models.config import RelayConfig
from daraz_relay.models.errors import UpstreamError


@pytest.fixture
def config() -> RelayConfig:
    return RelayConfig(app_key="100200", app_secret="test-secret", base_url="https://api.example.test/rest")


@pytest.fixture
def upstream_error() -> UpstreamError:
    return UpstreamError("请求失败: 500", details={"code": "ServiceError", "message": "boom"}, status_code=500)
